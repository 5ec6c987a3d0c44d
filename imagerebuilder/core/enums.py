from enum import Enum, IntEnum


class EngineKind(str, Enum):
    DOCKER = "docker"
    PODMAN = "podman"


class HashAlgo(str, Enum):
    SHA1 = "sha1"
    SHA256 = "sha256"


class ExitCode(IntEnum):
    """Process exit status per failure class"""
    SUCCESS = 0
    NO_ENGINE = 1
    INVALID_TAG = 38
    INVALID_EXECUTABLE = 39
    DOCKER_NOT_FOUND = 40
    PODMAN_NOT_FOUND = 41
    UNRECOGNIZED_ARGUMENT = 42
    MISSING_BUILD_FILE = 43
    MISSING_TARGET = 89
