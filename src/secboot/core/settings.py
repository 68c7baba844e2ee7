"""Environment settings for the simulator.

Values load from ``SECBOOT_*`` environment variables and an optional ``.env``
file in the working directory. CLI options override them per invocation.

Priority:
1. CLI options
2. Environment variables
3. .env file
4. Defaults below
"""

from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from secboot.core.instructions import DuplicatePolicy
from secboot.core.modes import Mode

SECBOOT_DIR = Path.home() / ".secboot"

ARCH_ALIASES = {
    "x8664": "x8664",
    "x86_64": "x8664",
    "x86-64": "x8664",
    "amd64": "x8664",
    "arm64": "arm64",
    "aarch64": "arm64",
}


class SecbootSettings(BaseSettings):
    """Simulator configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SECBOOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================
    # Simulation
    # ============================================
    arch: Literal["x8664", "arm64"] = "x8664"
    initial_mode: Literal["off", "uefi"] = "off"
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.OVERRIDE

    # ============================================
    # Shell
    # ============================================
    history_file: Path = SECBOOT_DIR / "history"
    show_banner: bool = True

    # ============================================
    # Logging
    # ============================================
    log_level: str = "WARNING"
    log_file: Path | None = None

    @field_validator("arch", mode="before")
    @classmethod
    def normalize_arch(cls, v: object) -> object:
        """Accept common spellings such as ``x86_64`` and ``aarch64``."""
        if isinstance(v, str):
            return ARCH_ALIASES.get(v.strip().lower(), v.strip().lower())
        return v

    @field_validator("initial_mode", mode="before")
    @classmethod
    def normalize_initial_mode(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level '{v}'")
        return level

    @property
    def start_mode(self) -> Mode:
        return Mode.parse(self.initial_mode)
