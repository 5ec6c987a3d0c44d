"""
Errors reported to the operator. Each carries the exit status the CLI
terminates with.
"""
from .enums import ExitCode


class RebuilderError(Exception):
    """Base class for failures that end a run with a specific exit code"""

    exit_code: ExitCode = ExitCode.NO_ENGINE

    def __init__(self, message: str, exit_code: ExitCode = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidExecutableError(RebuilderError):
    exit_code = ExitCode.INVALID_EXECUTABLE


class EngineNotFoundError(RebuilderError):
    exit_code = ExitCode.NO_ENGINE


class InvalidTagError(RebuilderError):
    exit_code = ExitCode.INVALID_TAG


class MissingBuildFileError(RebuilderError):
    exit_code = ExitCode.MISSING_BUILD_FILE


class MissingTargetError(RebuilderError):
    exit_code = ExitCode.MISSING_TARGET


class UnrecognizedArgumentError(RebuilderError):
    exit_code = ExitCode.UNRECOGNIZED_ARGUMENT
