from bzlmod_shared.infra.config.groups import ManifestConfig, ObservabilityConfig
from bzlmod_shared.infra.config.settings import Settings, settings

__all__ = [
    # Settings
    "Settings",
    "settings",
    # Config Groups
    "ManifestConfig",
    "ObservabilityConfig",
]
