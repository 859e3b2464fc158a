from functools import cached_property
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from bzlmod_shared.infra.config.groups import ManifestConfig, ObservabilityConfig


class Settings(BaseSettings):
    """
    Bzlmod Tooling Settings

    Environment variables use the BZLMOD_ prefix.
    Example: BZLMOD_LOG_LEVEL=DEBUG, BZLMOD_ROOT_MANIFEST=MODULE.bazel

    Grouped access:
        settings.manifest       # ManifestConfig
        settings.observability  # ObservabilityConfig
    """

    model_config = SettingsConfigDict(
        env_file=".env" if Path(".env").is_file() else None,
        env_file_encoding="utf-8",
        env_prefix="BZLMOD_",
        extra="ignore",
    )

    # ========================================================================
    # Grouped Config Accessors
    # ========================================================================

    @cached_property
    def manifest(self) -> ManifestConfig:
        """Manifest lookup group."""
        return ManifestConfig(
            root_manifest=self.root_manifest,
            encoding=self.manifest_encoding,
        )

    @cached_property
    def observability(self) -> ObservabilityConfig:
        """Logging group."""
        return ObservabilityConfig(
            log_level=self.log_level.upper(),
            log_format=self.log_format,
            include_caller=self.log_include_caller,
        )

    # ========================================================================
    # Manifest
    # ========================================================================
    root_manifest: str = "MODULE.bazel"
    manifest_encoding: str = "utf-8"

    # ========================================================================
    # Observability
    # ========================================================================
    log_level: str = "INFO"
    log_format: str = "console"
    log_include_caller: bool = False


# Eager loading (module-level instantiation)
settings = Settings()
