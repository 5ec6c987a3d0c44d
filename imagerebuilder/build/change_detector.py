"""
Detects changes in the build file and its base images.
"""
import logging

from ..engine.base import ContainerEngine
from .models import BuildDefinitionRecord, BaseImageRecord, RebuildDecision
from .hasher import FileHasher
from .scanner import BaseImageScanner, SCRATCH_IMAGE
from .digest_store import DigestStore


class ChangeDetector:
    """Compares current fingerprints with the stored ones and refreshes the store"""

    def __init__(
        self,
        engine: ContainerEngine,
        scanner: BaseImageScanner,
        hasher: FileHasher,
        build_file_store: DigestStore,
        image_store: DigestStore,
        build_file_record: str = "containerfile-digest.txt",
        image_record_suffix: str = "-digest.txt"
    ):
        """
        Initialize change detector.

        Args:
            engine: Engine used to pull base images
            scanner: BaseImageScanner instance
            hasher: FileHasher instance
            build_file_store: Store holding the build file record (context dir)
            image_store: Store holding base image records (working dir)
            build_file_record: Record filename for the build file
            image_record_suffix: Suffix of base image record filenames
        """
        self.engine = engine
        self.scanner = scanner
        self.hasher = hasher
        self.build_file_store = build_file_store
        self.image_store = image_store
        self.build_file_record = build_file_record
        self.image_record_suffix = image_record_suffix
        self.logger = logging.getLogger(__name__)

    def detect_changes(self, build_file: str, forced: bool = False) -> RebuildDecision:
        """
        Check the build file and every base image for changes.

        All base images are checked even after a change is found, so that
        every record is refreshed in the same run.

        Args:
            build_file: Path to the build file
            forced: Rebuild regardless of the comparison

        Returns:
            RebuildDecision for this run
        """
        decision = RebuildDecision(forced=forced)

        decision.build_definition = self.check_build_definition(build_file)
        if decision.build_definition.changed:
            decision.required = True

        for image_reference in self.scanner.scan_base_images(build_file):
            if image_reference == SCRATCH_IMAGE:
                self.logger.debug("Skipping reserved base image 'scratch'")
                continue

            record = self.check_base_image(image_reference)
            decision.base_images.append(record)
            if record.changed:
                decision.required = True

        self.logger.info(
            f"Change detection complete: required={decision.required}, "
            f"forced={decision.forced}, "
            f"build_file_changed={decision.build_definition.changed}, "
            f"changed_images={decision.get_changed_images()}"
        )

        return decision

    def check_build_definition(self, build_file: str) -> BuildDefinitionRecord:
        """
        Compare the build file fingerprint with its record.

        The record is only written when it is missing or differs.
        """
        record = BuildDefinitionRecord(
            path=build_file,
            current_fingerprint=self.hasher.compute_file_fingerprint(build_file),
            stored_fingerprint=self.build_file_store.read_stored(self.build_file_record)
        )

        if record.stored_fingerprint is None:
            self.logger.info("Dockerfile/Containerfile digest file missing, rebuild!")
        elif record.changed:
            self.logger.info("Dockerfile/Containerfile changed, rebuild!")
        else:
            self.logger.debug(f"Build file {build_file} unchanged")

        if record.changed:
            self.build_file_store.write_stored(self.build_file_record, record.current_fingerprint)

        return record

    def check_base_image(self, image_reference: str) -> BaseImageRecord:
        """
        Pull a base image and compare its digest with its record.

        The fresh digest is always written back.
        """
        self.logger.info(f"Pulling {image_reference} from the registry and checking digest ...")

        digest_file = DigestStore.derive_image_key(image_reference, self.image_record_suffix)
        record = BaseImageRecord(
            image_reference=image_reference,
            current_digest=self.engine.pull(image_reference),
            digest_file=digest_file,
            stored_digest=self.image_store.read_stored(digest_file)
        )

        if record.changed:
            self.logger.info(f"New image found for base image {image_reference}!")
        else:
            self.logger.info(
                f"Digest for {image_reference} stored in {digest_file} matches "
                f"current digest in the registry."
            )

        self.image_store.write_stored(digest_file, record.current_digest)

        return record
