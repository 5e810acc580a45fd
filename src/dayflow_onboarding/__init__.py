"""
Dayflow Onboarding: first-run setup wizard for the Dayflow capture app

Step sequencing, resumable progress and schema-versioned state migration.
"""

try:
    from importlib.metadata import version
    __version__ = version("dayflow-onboarding")
except Exception:
    __version__ = "0.0.0"  # Fallback for development

__all__ = ["__version__"]
