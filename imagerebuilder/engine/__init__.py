"""
Container engines: docker and podman command line clients.
"""
from .base import ContainerEngine
from .docker import DockerEngine
from .podman import PodmanEngine
from .factory import create_engine, engine_kind_for_executable, select_engine

__all__ = [
    'ContainerEngine',
    'DockerEngine',
    'PodmanEngine',
    'create_engine',
    'engine_kind_for_executable',
    'select_engine',
]
