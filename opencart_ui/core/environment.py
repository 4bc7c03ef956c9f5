"""
Environment configuration resolver.

Maps an environment name (qa, stage, dev, uat, prod) to the typed settings
read from its ``.properties`` file. Each environment is loaded once per
process and the resulting model is frozen, so it can be shared between
test threads without copying.
"""

import threading
from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigurationError
from .logging_config import get_logger


DEFAULT_ENVIRONMENT = "qa"

ENVIRONMENT_FILES: Dict[str, str] = {
    "qa": "qa.properties",
    "stage": "stage.properties",
    "dev": "dev.properties",
    "uat": "uat.properties",
    "prod": "config.properties",
}

KNOWN_ENVIRONMENTS = tuple(ENVIRONMENT_FILES)

logger = get_logger(__name__)


class EnvironmentConfig(BaseModel):
    """Typed view of one environment's properties file."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    name: str = Field(..., description="Environment name")
    browser: str = Field(..., description="Browser identifier")
    base_url: str = Field(..., alias="url", description="Application start URL")
    remote: bool = Field(False, description="Run against a remote grid")
    hub_url: Optional[str] = Field(None, alias="huburl", description="Grid hub URL")
    headless: bool = Field(False, description="Run without a visible window")
    incognito: bool = Field(False, description="Private browsing mode")
    browser_version: Optional[str] = Field(
        None, alias="browserversion", description="Browser version requested from the grid"
    )
    test_name: Optional[str] = Field(
        None, alias="testname", description="Session display name on the grid"
    )
    username: Optional[str] = Field(None, description="Login user for the suites")
    password: Optional[str] = Field(None, description="Login password for the suites")

    @field_validator("browser")
    @classmethod
    def normalize_browser(cls, v: str) -> str:
        if not v:
            raise ValueError("browser cannot be empty")
        return v.lower()

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v:
            raise ValueError("url cannot be empty")
        return v

    @field_validator("remote", "headless", "incognito", mode="before")
    @classmethod
    def parse_flag(cls, v):
        if v is None:
            return False
        if isinstance(v, str):
            v = v.strip()
            return v.lower() == "true" if v else False
        return v

    @field_validator("hub_url", "browser_version", "test_name", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def with_headless(self, headless: bool) -> "EnvironmentConfig":
        """Return a copy with the headless flag forced."""
        return self.model_copy(update={"headless": headless})

    def to_dict(self, mask_secrets: bool = True) -> Dict[str, object]:
        data = self.model_dump()
        if mask_secrets and data.get("password"):
            data["password"] = "****"
        return data


class ConfigurationResolver:
    """
    Resolves environment names to ``EnvironmentConfig`` instances.

    Args:
        config_dir: Directory holding the ``*.properties`` files
    """

    def __init__(self, config_dir: Path):
        self.config_dir = Path(config_dir)
        self._cache: Dict[str, EnvironmentConfig] = {}
        self._lock = threading.Lock()

    def resolve(self, env_name: Optional[str] = None) -> EnvironmentConfig:
        """
        Return the configuration of ``env_name``.

        A missing or blank name falls back to the ``qa`` environment.

        Raises:
            ConfigurationError: unknown name, missing file, bad or missing keys
        """
        name = self._normalize(env_name)

        with self._lock:
            cached = self._cache.get(name)
            if cached is not None:
                return cached

            env_config = self._load(name)
            self._cache[name] = env_config
            return env_config

    def _normalize(self, env_name: Optional[str]) -> str:
        if env_name is None or not env_name.strip():
            logger.warning(
                f"env name is not given, hence running it on {DEFAULT_ENVIRONMENT} environment"
            )
            return DEFAULT_ENVIRONMENT

        name = env_name.strip().lower()
        if name not in ENVIRONMENT_FILES:
            logger.error(f"please pass the right env name: {env_name}")
            raise ConfigurationError(
                f"Unknown environment '{env_name}'. Must be one of {list(KNOWN_ENVIRONMENTS)}",
                environment=env_name,
            )
        return name

    def properties_path(self, name: str) -> Path:
        return self.config_dir / ENVIRONMENT_FILES[name]

    def _load(self, name: str) -> EnvironmentConfig:
        path = self.properties_path(name)
        logger.info(f"running test suite on env: {name}")

        if not path.is_file():
            raise ConfigurationError(
                f"Properties file for environment '{name}' not found: {path}",
                environment=name,
            )

        raw = dotenv_values(path)
        properties = {key.strip().lower(): value for key, value in raw.items()}

        try:
            env_config = EnvironmentConfig.model_validate({**properties, "name": name})
        except ValidationError as e:
            violations = [
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            raise ConfigurationError(
                f"Invalid properties in {path}: " + "; ".join(violations),
                environment=name,
                violations=violations,
            ) from e

        if env_config.remote and not env_config.hub_url:
            raise ConfigurationError(
                f"Environment '{name}' is remote but defines no huburl",
                environment=name,
                violations=["huburl: required when remote=true"],
            )

        logger.debug(
            "Environment loaded",
            extra={"metadata": env_config.to_dict()},
        )
        return env_config
