"""
Main rebuild manager that wires change detection to the engine build.
"""
import logging
from pathlib import Path

from ..core.enums import EngineKind
from ..core.models import RebuildConfig
from .models import RebuildDecision, RebuildResult
from .hasher import FileHasher
from .scanner import BaseImageScanner
from .change_detector import ChangeDetector
from .digest_store import DigestStore


class RebuildManager:
    """
    Main orchestrator: decide whether the target image is stale and
    rebuild it if so.
    """

    def __init__(self, config: RebuildConfig):
        """
        Initialize rebuild manager.

        Args:
            config: Run configuration
        """
        self.config = config
        self.logger = logging.getLogger(__name__)

        # Initialize components
        self.scanner = BaseImageScanner()
        self.hasher = FileHasher(config.hash_algorithm)
        self.build_file_store = DigestStore(Path(config.context_dir))
        self.image_store = DigestStore(config.state_dir)
        self.change_detector = ChangeDetector(
            engine=config.engine,
            scanner=self.scanner,
            hasher=self.hasher,
            build_file_store=self.build_file_store,
            image_store=self.image_store,
            build_file_record=config.build_file_record,
            image_record_suffix=config.image_record_suffix
        )

        if config.engine.kind == EngineKind.PODMAN:
            self.logger.warning(
                "Podman support is less tested than docker, please report any problems"
            )

    def decide(self) -> RebuildDecision:
        """Run change detection, refreshing the stored fingerprints"""
        return self.change_detector.detect_changes(
            self.config.build_file,
            forced=self.config.force
        )

    def run(self) -> RebuildResult:
        """
        Decide and rebuild when needed.

        Returns:
            RebuildResult with the decision and the build exit code, if built
        """
        decision = self.decide()
        result = RebuildResult(decision=decision, image_tags=self.config.image_tags)

        if decision.should_build:
            self.logger.info(
                f"Building [{self.config.build_file}] using [{self.config.engine.executable}], "
                f"with context directory [{self.config.context_dir}] and tagging with "
                f"tags {result.image_tags}."
            )
            result.build_exit_code = self.config.engine.build(
                image_tags=result.image_tags,
                label=self.config.label,
                build_file=self.config.build_file,
                context_dir=self.config.context_dir
            )
            result.built = True
        else:
            self.logger.info("The image is up to date, skipping rebuild.")

        if decision.forced:
            self.logger.info(
                "Note: the rebuild was forced with the -r flag, which is chiefly meant for "
                "testing. A tool that always rebuilds does not need digest tracking."
            )

        return result
