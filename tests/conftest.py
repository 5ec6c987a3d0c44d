"""Pytest configuration and fixtures for image-rebuilder tests."""

import sys
from pathlib import Path
from typing import Dict, List
import pytest
import logging

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from imagerebuilder.core.enums import EngineKind
from imagerebuilder.engine.base import ContainerEngine

# Configure logging
logging.basicConfig(level=logging.INFO)


class FakeEngine(ContainerEngine):
    """Engine serving digests from a dict instead of a registry"""

    kind = EngineKind.DOCKER
    default_build_file = "Dockerfile"

    def __init__(self, digests: Dict[str, str] = None, build_exit_code: int = 0):
        super().__init__("/usr/bin/fake-docker")
        self.digests = dict(digests or {})
        self.build_exit_code = build_exit_code
        self.pulled: List[str] = []
        self.builds: List[dict] = []

    def extract_digest(self, pull_output: str) -> str:
        return pull_output

    def pull(self, image_reference: str) -> str:
        self.pulled.append(image_reference)
        return self.digests.get(image_reference, "")

    def build(self, image_tags, label, build_file, context_dir) -> int:
        self.builds.append({
            'image_tags': list(image_tags),
            'label': label,
            'build_file': build_file,
            'context_dir': context_dir,
        })
        return self.build_exit_code


@pytest.fixture
def fake_engine() -> FakeEngine:
    """Engine with one known base image"""
    return FakeEngine({
        'base:1.0': 'Digest: sha256:' + 'a' * 64,
    })


@pytest.fixture
def workdir(tmp_path, monkeypatch) -> Path:
    """Empty working directory the test runs in"""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def dockerfile(workdir) -> Path:
    """Dockerfile with a real base image and scratch"""
    path = workdir / "Dockerfile"
    path.write_text(
        "FROM base:1.0\n"
        "RUN echo hello\n"
        "FROM scratch\n"
        "COPY --from=0 /etc/hostname /hostname\n"
    )
    return path
