"""
Dayflow Onboarding Exceptions

Custom exception types for the onboarding wizard, with remediation hints.
"""

from typing import Optional


class OnboardingError(Exception):
    """Base exception for all onboarding errors."""

    def __init__(
        self,
        message: str,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        """Initialize the error.

        Args:
            message: Human-readable error message
            remediation: Suggested fix for the user
            details: Technical details for debugging
        """
        super().__init__(message)
        self.message = message
        self.remediation = remediation
        self.details = details

    def __str__(self) -> str:
        parts = [self.message]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.remediation:
            parts.append(f"To fix: {self.remediation}")
        return "\n".join(parts)


class ConfigError(OnboardingError):
    """Configuration-related errors."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.config_key = config_key
        if not remediation and config_key:
            remediation = f"Check the '{config_key}' setting in onboarding.yaml or its environment override"
        super().__init__(message, remediation, details)


class PersistenceError(OnboardingError):
    """The state store could not be written. Resuming is no longer guaranteed."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.path = path
        if not remediation:
            if path:
                remediation = f"Make sure {path} is writable and the disk is not full"
            else:
                remediation = "Make sure the onboarding state location is writable"
        super().__init__(message, remediation, details)


class MigrationError(OnboardingError):
    """A migration table is missing or points outside the current sequence."""

    def __init__(
        self,
        message: str,
        from_version: Optional[int] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.from_version = from_version
        if not remediation and from_version is not None:
            remediation = f"Add or fix the step table for schema version {from_version}"
        super().__init__(message, remediation, details)


class StepDefinitionError(OnboardingError):
    """The step sequence itself is malformed."""


class InvalidTransitionError(OnboardingError):
    """A transition was requested that the step sequence does not allow."""

    def __init__(
        self,
        message: str,
        step: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.step = step
        super().__init__(message, remediation, details)


class CapabilityUnavailableError(OnboardingError):
    """The capability probe could not confirm access."""

    def __init__(
        self,
        message: str,
        capability: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.capability = capability
        if not remediation and capability:
            remediation = f"Grant {capability} access in System Settings and restart Dayflow"
        super().__init__(message, remediation, details)


# Error code mapping for CLI exit codes
ERROR_CODES = {
    ConfigError: 10,
    PersistenceError: 11,
    MigrationError: 12,
    StepDefinitionError: 13,
    InvalidTransitionError: 14,
    CapabilityUnavailableError: 15,
    OnboardingError: 1,
}


def get_error_code(error: Exception) -> int:
    """Get the exit code for an error type."""
    for error_type, code in ERROR_CODES.items():
        if isinstance(error, error_type):
            return code
    return 1
