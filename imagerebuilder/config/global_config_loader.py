import yaml
from pathlib import Path
from typing import Optional, Dict, Any, List
from dataclasses import dataclass, field

from ..core.enums import HashAlgo


@dataclass
class DigestConfig:
    """Where and how fingerprints are stored"""
    algorithm: str = HashAlgo.SHA256.value  # "sha1" reads records of the shell script
    build_file_record: str = "containerfile-digest.txt"
    image_record_suffix: str = "-digest.txt"
    state_dir: str = "."


@dataclass
class BuildConfig:
    """Build invocation settings"""
    label: str = "built-with-image-rebuilder=true"
    default_tags: List[str] = field(default_factory=lambda: ["latest", "_timestamp"])
    timestamp_placeholder: str = "_timestamp"
    build_timeout: Optional[float] = None


@dataclass
class EngineConfig:
    """Container engine discovery"""
    docker_executable: str = "docker"
    podman_executable: str = "podman"
    pull_timeout: Optional[float] = None


@dataclass
class GlobalConfig:
    """Global configuration for image-rebuilder"""
    digest: DigestConfig
    build: BuildConfig
    engine: EngineConfig

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GlobalConfig':
        """Create GlobalConfig from dictionary"""
        return cls(
            digest=DigestConfig(**(data.get('digest') or {})),
            build=BuildConfig(**(data.get('build') or {})),
            engine=EngineConfig(**(data.get('engine') or {}))
        )

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'GlobalConfig':
        """Load GlobalConfig from YAML file"""
        path = Path(yaml_path)
        if not path.exists():
            # Return default config if file doesn't exist
            return cls.default()

        with open(path, 'r') as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def default(cls) -> 'GlobalConfig':
        """Return default configuration"""
        return cls(
            digest=DigestConfig(),
            build=BuildConfig(),
            engine=EngineConfig()
        )


def load_global_config(config_path: Optional[str] = None) -> GlobalConfig:
    """
    Load global configuration from YAML file.
    If no path provided, looks for a config file in standard locations.
    """
    if config_path:
        return GlobalConfig.from_yaml(config_path)

    search_paths = [
        Path("./image_rebuilder.yaml"),
        Path.home() / ".config" / "image-rebuilder" / "config.yaml",
    ]

    for path in search_paths:
        if path.exists():
            return GlobalConfig.from_yaml(str(path))

    return GlobalConfig.default()
