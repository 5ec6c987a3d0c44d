"""
image-rebuilder - keep Dockerfile based images up to date

Rebuilds an image with docker or podman when its build file or any of the
base images named by FROM changed since the last run.

Main modules:
- build: change detection, digest store and the rebuild manager
- engine: docker and podman command line clients
- config: global configuration loading
- cli: command line interface
"""

from .build.manager import RebuildManager
from .build.models import RebuildDecision, RebuildResult
from .core.models import RebuildConfig
from .engine.factory import select_engine

__version__ = "1.0.0"
__all__ = [
    'RebuildManager',
    'RebuildDecision',
    'RebuildResult',
    'RebuildConfig',
    'select_engine',
]
