"""Configuration dataclass for capharness.

Provides HarnessConfig for centralized configuration. Programmatic users
construct it directly; the CLI loads it from environment variables via
from_env().

Environment Variables:
    CAPHARNESS_SEED: Seed of the simulated random source (default: 4)
    CAPHARNESS_SCRIPT_EXTENSION: Suffix of script files (default: .rad)
    CAPHARNESS_SCRIPTS_DIR: Default root for script discovery (optional)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from capharness.infra.tools.env import get_scripts_dir
from capharness.testing.discovery import DEFAULT_EXTENSION
from capharness.testing.runner import DEFAULT_SEED


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        message = "Configuration validation failed:\n" + "\n".join(
            f"  - {e}" for e in errors
        )
        super().__init__(message)


@dataclass(frozen=True)
class HarnessConfig:
    """Centralized configuration for the harness CLI.

    Attributes:
        seed: Seed of the simulated random source.
            Env: CAPHARNESS_SEED (default: 4)
        script_extension: Suffix used by script discovery.
            Env: CAPHARNESS_SCRIPT_EXTENSION (default: .rad)
        scripts_dir: Default root for ``capharness files``.
            Env: CAPHARNESS_SCRIPTS_DIR (default: current directory)

    Example:
        config = HarnessConfig(seed=7)
        config = HarnessConfig.from_env()
    """

    seed: int = DEFAULT_SEED
    script_extension: str = DEFAULT_EXTENSION
    scripts_dir: Path | None = None

    @classmethod
    def from_env(cls, *, validate: bool = True) -> HarnessConfig:
        """Create HarnessConfig from environment variables.

        Args:
            validate: If True (default), run validate() and raise on errors.

        Raises:
            ConfigurationError: If a variable cannot be parsed, or if
                validate=True and the configuration is invalid.
        """
        parse_errors: list[str] = []

        seed = DEFAULT_SEED
        seed_raw = os.environ.get("CAPHARNESS_SEED")
        if seed_raw:
            try:
                seed = int(seed_raw)
            except ValueError:
                parse_errors.append(f"CAPHARNESS_SEED: invalid integer '{seed_raw}'")

        config = cls(
            seed=seed,
            script_extension=os.environ.get("CAPHARNESS_SCRIPT_EXTENSION")
            or DEFAULT_EXTENSION,
            scripts_dir=get_scripts_dir(),
        )

        if validate:
            errors = config.validate()
            errors.extend(parse_errors)
            if errors:
                raise ConfigurationError(errors)
        elif parse_errors:
            raise ConfigurationError(parse_errors)

        return config

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors.

        Returns:
            List of error messages. Empty list if configuration is valid.
        """
        errors: list[str] = []
        if not self.script_extension.startswith("."):
            errors.append(
                f"script_extension must start with '.', got: {self.script_extension}"
            )
        if self.scripts_dir is not None and not self.scripts_dir.is_dir():
            errors.append(f"scripts_dir is not a directory: {self.scripts_dir}")
        return errors
