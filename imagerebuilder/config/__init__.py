from .global_config_loader import (
    GlobalConfig,
    DigestConfig,
    BuildConfig,
    EngineConfig,
    load_global_config
)

__all__ = [
    'GlobalConfig',
    'DigestConfig',
    'BuildConfig',
    'EngineConfig',
    'load_global_config',
]
