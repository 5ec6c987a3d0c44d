"""
Run configuration shared by the change detector and the rebuild trigger.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .enums import HashAlgo
from ..engine.base import ContainerEngine


@dataclass
class RebuildConfig:
    """Everything a single run needs, built once from the parsed arguments"""
    engine: ContainerEngine
    # Kept as given on the command line, the file fingerprint embeds it
    build_file: str
    context_dir: str
    target_image: str
    tags: List[str] = field(default_factory=list)
    force: bool = False
    state_dir: Path = Path(".")
    label: str = "built-with-image-rebuilder=true"
    hash_algorithm: HashAlgo = HashAlgo.SHA256
    build_file_record: str = "containerfile-digest.txt"
    image_record_suffix: str = "-digest.txt"

    def __post_init__(self):
        self.state_dir = Path(self.state_dir)
        if isinstance(self.hash_algorithm, str):
            self.hash_algorithm = HashAlgo(self.hash_algorithm)

    @property
    def image_tags(self) -> List[str]:
        """Full image names passed to the build, one per tag"""
        return [f"{self.target_image}:{tag}" for tag in self.tags]
