"""
Container engine abstraction. An engine can pull an image, reporting the
digest token the registry served, and build an image from a build file.
"""
import logging
import shlex
import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional

from ..core.enums import EngineKind

# Same status coreutils `timeout` reports
BUILD_TIMEOUT_EXIT_CODE = 124

class ContainerEngine(ABC):
    """Base class for the docker and podman command line clients"""

    kind: EngineKind
    # Build file used when none is given on the command line
    default_build_file: str

    def __init__(
        self,
        executable: str,
        pull_timeout: Optional[float] = None,
        build_timeout: Optional[float] = None
    ):
        """
        Initialize engine.

        Args:
            executable: Path or name of the engine executable
            pull_timeout: Seconds before a pull is abandoned, None waits forever
            build_timeout: Seconds before a build is abandoned, None waits forever
        """
        self.executable = executable
        self.pull_timeout = pull_timeout
        self.build_timeout = build_timeout
        self.logger = logging.getLogger(__name__)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.executable!r})"

    @abstractmethod
    def extract_digest(self, pull_output: str) -> str:
        """Pick the digest token out of the human readable pull output"""

    def pull(self, image_reference: str) -> str:
        """
        Pull an image and return its digest token.

        A failed pull returns an empty string. Callers treat an empty token
        as a changed image so that a broken registry errs toward rebuilding.

        Args:
            image_reference: Image to pull, e.g. 'ubuntu:22.04'

        Returns:
            Digest token, or '' if the pull failed
        """
        command = [self.executable, "pull", image_reference]
        self.logger.debug(f"Running: {shlex.join(command)}")

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.pull_timeout
            )
        except subprocess.TimeoutExpired:
            self.logger.warning(
                f"Pull of {image_reference} timed out after {self.pull_timeout}s"
            )
            return ""
        except OSError as e:
            self.logger.warning(f"Could not run {self.executable}: {e}")
            return ""

        if result.returncode != 0:
            self.logger.warning(
                f"Pull of {image_reference} failed with exit code "
                f"{result.returncode}: {result.stderr.strip()}"
            )
            return ""

        digest = self.extract_digest(result.stdout)
        if not digest:
            self.logger.warning(f"No digest found in pull output for {image_reference}")
        return digest

    def build_command(
        self,
        image_tags: List[str],
        label: str,
        build_file: str,
        context_dir: str
    ) -> List[str]:
        """Command line for building an image, identical for docker and podman"""
        command = [self.executable, "build"]
        for image_tag in image_tags:
            command.extend(["--tag", image_tag])
        command.extend(["--label", label, "-f", build_file, context_dir])
        return command

    def build(
        self,
        image_tags: List[str],
        label: str,
        build_file: str,
        context_dir: str
    ) -> int:
        """
        Build an image. Output goes straight to the terminal.

        Returns:
            Exit code of the build command
        """
        command = self.build_command(image_tags, label, build_file, context_dir)
        self.logger.info(f"+ {shlex.join(command)}")

        try:
            result = subprocess.run(command, timeout=self.build_timeout)
        except subprocess.TimeoutExpired:
            self.logger.error(f"Build timed out after {self.build_timeout}s")
            return BUILD_TIMEOUT_EXIT_CODE
        return result.returncode
