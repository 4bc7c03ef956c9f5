"""
Framework configuration for the OpenCart UI suite.

Handles environment variables, defaults and directory layout. The
per-environment browser settings live in ``environment.py``; this class only
describes where things are and how the framework itself behaves.
"""

import os
from typing import Optional, Dict, Any
from dataclasses import dataclass, field
from pathlib import Path


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
VALID_LOG_FORMATS = ["text", "json"]


@dataclass
class Config:
    """Configuration class with environment variable support."""

    # Environment detection
    ci_mode: bool = field(default=False)

    # Which properties file to load (None -> resolver default)
    environment: Optional[str] = field(default=None)

    # Forces headless regardless of the properties file
    headless_override: Optional[bool] = field(default=None)

    # Logging configuration
    log_level: str = field(default="INFO")
    log_format: str = field(default="text")

    # Directory paths
    project_root: Path = field(default_factory=lambda: Path.cwd())
    config_dir: Path = field(default_factory=lambda: Path.cwd() / "config")
    testdata_dir: Path = field(default_factory=lambda: Path.cwd() / "testdata")
    reports_dir: Path = field(default_factory=lambda: Path.cwd() / "reports")
    screenshots_dir: Path = field(default_factory=lambda: Path.cwd() / "screenshots")
    logs_dir: Path = field(default_factory=lambda: Path.cwd() / "logs")

    report_file_name: str = field(default="TestExecutionReport.html")

    def __post_init__(self):
        """Apply environment overrides while respecting explicit constructor args."""
        if os.getenv("CI", "").lower() == "true" and self.ci_mode is False:
            self.ci_mode = True

        env_name = os.getenv("OPENCART_ENV")
        if env_name and self.environment is None:
            self.environment = env_name.strip()

        headless_env = os.getenv("OPENCART_HEADLESS")
        if headless_env is not None:
            self.headless_override = headless_env.lower() == "true"

        log_env = os.getenv("OPENCART_LOG_LEVEL")
        if log_env:
            self.log_level = log_env
        self.log_level = self.log_level.upper()
        if self.log_level == "WARN":
            self.log_level = "WARNING"
        if self.log_level not in VALID_LOG_LEVELS:
            self.log_level = "INFO"

        # CI logs are consumed by machines
        if self.ci_mode and self.log_format == "text":
            self.log_format = "json"

    @property
    def is_ci_mode(self) -> bool:
        """Check if running in CI environment."""
        return self.ci_mode

    @property
    def debug_enabled(self) -> bool:
        """Check if debug logging is enabled."""
        return self.log_level == "DEBUG"

    @property
    def report_path(self) -> Path:
        """Fixed location of the HTML report, overwritten each run."""
        return self.reports_dir / self.report_file_name

    def get_log_file_path(self) -> Path:
        """Get the main log file path."""
        self.logs_dir.mkdir(parents=True, exist_ok=True)
        return self.logs_dir / "opencart-ui.log"

    def get_debug_log_dir(self) -> Path:
        """Get the debug log directory path."""
        debug_dir = self.logs_dir / "debug"
        debug_dir.mkdir(parents=True, exist_ok=True)
        return debug_dir

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for logging."""
        return {
            "ci_mode": self.ci_mode,
            "environment": self.environment,
            "headless_override": self.headless_override,
            "log_level": self.log_level,
            "log_format": self.log_format,
            "project_root": str(self.project_root),
            "config_dir": str(self.config_dir),
            "testdata_dir": str(self.testdata_dir),
            "reports_dir": str(self.reports_dir),
            "screenshots_dir": str(self.screenshots_dir),
            "logs_dir": str(self.logs_dir),
        }

    @classmethod
    def from_root(cls, root: Path, **overrides) -> "Config":
        """Create a configuration whose directories all hang off ``root``."""
        root = Path(root)
        return cls(
            project_root=root,
            config_dir=root / "config",
            testdata_dir=root / "testdata",
            reports_dir=root / "reports",
            screenshots_dir=root / "screenshots",
            logs_dir=root / "logs",
            **overrides,
        )

    def validate(self) -> None:
        """Validate configuration and raise ConfigurationError if invalid."""
        from .exceptions import ConfigurationError

        errors = []

        if self.log_level not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid log level: {self.log_level}. Must be one of {VALID_LOG_LEVELS}"
            )

        if self.log_format not in VALID_LOG_FORMATS:
            errors.append(
                f"Invalid log format: {self.log_format}. Must be one of {VALID_LOG_FORMATS}"
            )

        if not self.config_dir.exists():
            errors.append(f"config directory does not exist: {self.config_dir}")

        if not self.testdata_dir.exists():
            errors.append(f"testdata directory does not exist: {self.testdata_dir}")

        if errors:
            message = "Configuration validation failed: " + "; ".join(errors)
            raise ConfigurationError(
                message,
                environment=self.environment,
                violations=errors,
            )
