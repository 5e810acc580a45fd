"""
Dayflow Onboarding Wizard

Resumable first-run wizard with versioned step persistence.
"""

from dayflow_onboarding.wizard.controller import WizardController
from dayflow_onboarding.wizard.ui import WizardUI

__all__ = ["WizardController", "WizardUI"]
