"""
Change detection and rebuild for container images.
Tracks the build file and base image digests between runs.
"""

from .models import (
    BuildDefinitionRecord,
    BaseImageRecord,
    RebuildDecision,
    RebuildResult
)
from .hasher import FileHasher
from .scanner import BaseImageScanner
from .digest_store import DigestStore
from .change_detector import ChangeDetector
from .manager import RebuildManager

__all__ = [
    'BuildDefinitionRecord',
    'BaseImageRecord',
    'RebuildDecision',
    'RebuildResult',
    'FileHasher',
    'BaseImageScanner',
    'DigestStore',
    'ChangeDetector',
    'RebuildManager',
]
