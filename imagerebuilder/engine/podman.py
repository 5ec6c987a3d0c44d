"""
Podman command line client.
"""
from .base import ContainerEngine
from ..core.enums import EngineKind


class PodmanEngine(ContainerEngine):
    """`podman pull` prints the image id as the last line of its output"""

    kind = EngineKind.PODMAN
    default_build_file = "Containerfile"

    def extract_digest(self, pull_output: str) -> str:
        lines = pull_output.splitlines()
        return lines[-1] if lines else ""
