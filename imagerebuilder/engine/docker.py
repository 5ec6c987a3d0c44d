"""
Docker command line client.
"""
from .base import ContainerEngine
from ..core.enums import EngineKind


class DockerEngine(ContainerEngine):
    """
    `docker pull` prints a line such as

        Digest: sha256:2bafb1fb2d6489bccadc1b7c172937e9b56a888ed77e625a4ebe59a6b038221e

    The whole line, marker included, is the digest token.
    """

    kind = EngineKind.DOCKER
    default_build_file = "Dockerfile"

    DIGEST_MARKER = "Digest:"

    def extract_digest(self, pull_output: str) -> str:
        lines = [line for line in pull_output.splitlines() if self.DIGEST_MARKER in line]
        return "\n".join(lines)
