"""Tests for onboarding exceptions."""

import pytest


class TestOnboardingExceptions:
    """Test custom exception types."""

    def test_base_error_message(self):
        """Test base OnboardingError with message only."""
        from dayflow_onboarding.wizard.exceptions import OnboardingError

        error = OnboardingError("Something went wrong")
        assert error.message == "Something went wrong"
        assert error.remediation is None
        assert error.details is None
        assert str(error) == "Something went wrong"

    def test_base_error_with_remediation_and_details(self):
        from dayflow_onboarding.wizard.exceptions import OnboardingError

        error = OnboardingError(
            "Something went wrong",
            remediation="Try again later",
            details="errno 28"
        )
        assert str(error).splitlines() == [
            "Something went wrong",
            "Details: errno 28",
            "To fix: Try again later",
        ]

    def test_config_error(self):
        from dayflow_onboarding.wizard.exceptions import ConfigError

        error = ConfigError("Bad provider", config_key="default_provider")
        assert error.config_key == "default_provider"
        assert "default_provider" in str(error)
        assert "onboarding.yaml" in str(error)

    def test_persistence_error_names_path(self):
        from dayflow_onboarding.wizard.exceptions import PersistenceError

        error = PersistenceError("Could not save", path="/tmp/state.json")
        assert error.path == "/tmp/state.json"
        assert "/tmp/state.json" in error.remediation

    def test_persistence_error_without_path(self):
        from dayflow_onboarding.wizard.exceptions import PersistenceError

        error = PersistenceError("Could not save")
        assert error.remediation is not None

    def test_migration_error(self):
        from dayflow_onboarding.wizard.exceptions import MigrationError

        error = MigrationError("No table", from_version=2)
        assert error.from_version == 2
        assert "schema version 2" in str(error)

    def test_custom_remediation_wins(self):
        from dayflow_onboarding.wizard.exceptions import CapabilityUnavailableError

        error = CapabilityUnavailableError(
            "Denied",
            capability="screen recording",
            remediation="Ask your admin"
        )
        assert error.remediation == "Ask your admin"


class TestErrorCodes:
    """Test CLI exit code mapping."""

    @pytest.mark.parametrize("error_name,code", [
        ("ConfigError", 10),
        ("PersistenceError", 11),
        ("MigrationError", 12),
        ("StepDefinitionError", 13),
        ("InvalidTransitionError", 14),
        ("CapabilityUnavailableError", 15),
        ("OnboardingError", 1),
    ])
    def test_error_codes(self, error_name, code):
        from dayflow_onboarding.wizard import exceptions

        error = getattr(exceptions, error_name)("boom")
        assert exceptions.get_error_code(error) == code

    def test_foreign_exception(self):
        from dayflow_onboarding.wizard.exceptions import get_error_code

        assert get_error_code(ValueError("x")) == 1

    def test_all_inherit_from_base(self):
        from dayflow_onboarding.wizard.exceptions import ERROR_CODES, OnboardingError

        for error_type in ERROR_CODES:
            assert issubclass(error_type, OnboardingError)
