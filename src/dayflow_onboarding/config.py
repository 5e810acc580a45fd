"""
Dayflow Onboarding Configuration

Loads onboarding.yaml and environment overrides.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from dayflow_onboarding.wizard.exceptions import ConfigError
from dayflow_onboarding.wizard.logging_config import get_logger, is_debug_mode
from dayflow_onboarding.wizard.steps import PROVIDERS


logger = get_logger("config")


def get_default_config_dir() -> Path:
    """Get the default Dayflow settings directory."""
    return Path.home() / ".dayflow"


def get_default_config_path() -> Path:
    return Path(os.environ.get(
        "DAYFLOW_ONBOARDING_CONFIG",
        get_default_config_dir() / "onboarding.yaml"
    ))


def get_default_state_path() -> Path:
    return Path(os.environ.get(
        "DAYFLOW_ONBOARDING_STATE",
        get_default_config_dir() / "onboarding-state.json"
    ))


@dataclass
class OnboardingConfig:
    """Settings for the onboarding wizard."""
    state_path: Path = field(default_factory=get_default_state_path)
    fast_path_provider: str = "dayflow"
    default_provider: str = "gemini"
    providers: Dict[str, dict] = field(default_factory=lambda: dict(PROVIDERS))
    log_file: Optional[Path] = None
    debug: bool = False

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "OnboardingConfig":
        """Load configuration from YAML, then apply environment overrides.

        A missing file is not an error; defaults are used.

        Args:
            path: Config file (default: DAYFLOW_ONBOARDING_CONFIG or ~/.dayflow/onboarding.yaml)

        Raises:
            ConfigError: If the file is unreadable or holds invalid values
        """
        config_path = Path(path) if path else get_default_config_path()
        data: Dict[str, Any] = {}

        if config_path.exists():
            try:
                loaded = yaml.safe_load(config_path.read_text())
            except (OSError, yaml.YAMLError) as e:
                raise ConfigError(
                    f"Could not read {config_path}",
                    details=str(e),
                    remediation="Fix the YAML syntax or remove the file to use defaults"
                ) from e
            if loaded is None:
                loaded = {}
            if not isinstance(loaded, dict):
                raise ConfigError(
                    f"{config_path} must contain a mapping of settings",
                    remediation="Use 'key: value' lines at the top level"
                )
            data = loaded
            logger.debug("Loaded onboarding config from %s", config_path)

        config = cls()
        if "state_path" in data:
            config.state_path = Path(data["state_path"]).expanduser()
        if "fast_path_provider" in data:
            config.fast_path_provider = str(data["fast_path_provider"])
        if "default_provider" in data:
            config.default_provider = str(data["default_provider"])
        if "providers" in data:
            providers = data["providers"]
            if not isinstance(providers, dict) or not providers:
                raise ConfigError(
                    "providers must be a non-empty mapping",
                    config_key="providers"
                )
            config.providers = {
                str(key): (value if isinstance(value, dict) else {"name": str(value)})
                for key, value in providers.items()
            }
        if data.get("log_file"):
            config.log_file = Path(data["log_file"]).expanduser()
        if "debug" in data:
            if not isinstance(data["debug"], bool):
                raise ConfigError(
                    "debug must be true or false",
                    config_key="debug",
                    details=f"Got {data['debug']!r}",
                    remediation="Write 'debug: true' or 'debug: false' without quotes"
                )
            config.debug = data["debug"]

        # Environment overrides
        if os.environ.get("DAYFLOW_ONBOARDING_STATE"):
            config.state_path = Path(os.environ["DAYFLOW_ONBOARDING_STATE"])
        if os.environ.get("DAYFLOW_FAST_PATH_PROVIDER"):
            config.fast_path_provider = os.environ["DAYFLOW_FAST_PATH_PROVIDER"]
        if is_debug_mode():
            config.debug = True

        config.validate()
        return config

    def validate(self):
        """Check cross-field consistency."""
        if self.default_provider not in self.providers:
            raise ConfigError(
                f"Default provider '{self.default_provider}' is not a known provider",
                config_key="default_provider",
                details=f"Known providers: {', '.join(self.providers)}"
            )
        if not self.fast_path_provider:
            raise ConfigError(
                "fast_path_provider must not be empty",
                config_key="fast_path_provider"
            )
