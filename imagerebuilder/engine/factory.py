"""
Picks the container engine for a run from the command line flags and what
is installed on PATH.
"""
import logging
import shutil
from typing import Optional, Union

from .base import ContainerEngine
from .docker import DockerEngine
from .podman import PodmanEngine
from ..core.enums import EngineKind, ExitCode
from ..core.exceptions import EngineNotFoundError, InvalidExecutableError

logger = logging.getLogger(__name__)

ENGINE_CLASSES = {
    EngineKind.DOCKER: DockerEngine,
    EngineKind.PODMAN: PodmanEngine,
}


def create_engine(
    kind: Union[EngineKind, str],
    executable: str,
    pull_timeout: Optional[float] = None,
    build_timeout: Optional[float] = None
) -> ContainerEngine:
    """Instantiate the engine class for `kind`"""
    engine_class = ENGINE_CLASSES[EngineKind(kind)]
    return engine_class(executable, pull_timeout=pull_timeout, build_timeout=build_timeout)


def engine_kind_for_executable(executable: str) -> EngineKind:
    """
    Infer the engine kind from the executable path.

    Raises:
        InvalidExecutableError: If the path names neither docker nor podman
    """
    if "podman" in executable:
        return EngineKind.PODMAN
    if "docker" in executable:
        return EngineKind.DOCKER
    raise InvalidExecutableError(
        "Only docker and podman are supported. If your executable does not have a name "
        "containing 'docker' or 'podman', create an alias (symlink/shortcut) to the "
        "executable and use that."
    )


def select_engine(
    executable: Optional[str] = None,
    kind: Optional[Union[EngineKind, str]] = None,
    docker_executable: str = "docker",
    podman_executable: str = "podman",
    pull_timeout: Optional[float] = None,
    build_timeout: Optional[float] = None
) -> ContainerEngine:
    """
    Select the engine for this run.

    An explicit executable wins over an explicit kind. Without either,
    docker is preferred over podman.

    Args:
        executable: Explicit executable path (-e)
        kind: Explicitly requested engine kind (-d / -p)
        docker_executable: Name searched on PATH for docker
        podman_executable: Name searched on PATH for podman
        pull_timeout: Passed to the engine
        build_timeout: Passed to the engine

    Returns:
        ContainerEngine ready to use

    Raises:
        InvalidExecutableError: Explicit executable names neither engine
        EngineNotFoundError: Requested or any engine not found on PATH
    """
    timeouts = {'pull_timeout': pull_timeout, 'build_timeout': build_timeout}

    if executable:
        engine_kind = engine_kind_for_executable(executable)
        logger.info(f"Using executable {executable}")
        return create_engine(engine_kind, executable, **timeouts)

    docker_path = shutil.which(docker_executable)
    podman_path = shutil.which(podman_executable)

    if kind is not None:
        kind = EngineKind(kind)
        if kind == EngineKind.DOCKER:
            if not docker_path:
                raise EngineNotFoundError(
                    "Docker cli executable not found on path! Try specifying it with the -e flag.",
                    ExitCode.DOCKER_NOT_FOUND
                )
            logger.info("Using Docker")
            return create_engine(kind, docker_path, **timeouts)

        if not podman_path:
            raise EngineNotFoundError(
                "Podman cli executable not found on path! Try specifying it with the -e flag.",
                ExitCode.PODMAN_NOT_FOUND
            )
        logger.info("Using Podman")
        return create_engine(kind, podman_path, **timeouts)

    if docker_path:
        logger.info(f"Using docker at {docker_path}")
        return create_engine(EngineKind.DOCKER, docker_path, **timeouts)

    if podman_path:
        logger.info(f"Using podman at {podman_path}")
        return create_engine(EngineKind.PODMAN, podman_path, **timeouts)

    raise EngineNotFoundError(
        "No executable was found! Optionally specify one with the -e flag.",
        ExitCode.NO_ENGINE
    )
