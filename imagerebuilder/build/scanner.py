"""
Finds the base images a build file is built upon.
"""
from pathlib import Path
from typing import List, Union
import logging

SCRATCH_IMAGE = "scratch"
FROM_INSTRUCTION = "FROM"


class BaseImageScanner:
    """Extracts base image references from FROM instructions"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def scan_base_images(self, build_file: Union[str, Path]) -> List[str]:
        """
        Read a build file and list its base images.

        Args:
            build_file: Path to the Dockerfile/Containerfile

        Returns:
            Image references in file order, duplicates kept
        """
        with open(build_file, 'r', encoding='utf-8') as f:
            content = f.read()

        base_images = self.parse_base_images(content)
        self.logger.info(f"Found base images {base_images} in {build_file}")
        return base_images

    def parse_base_images(self, content: str) -> List[str]:
        """
        Parse FROM instructions out of build file text.

        Only lines starting in column one with FROM count. Option words
        such as --platform=... and a trailing 'AS <stage>' are dropped, and
        a FROM naming an earlier stage of a multi-stage build is skipped
        since there is nothing to pull for it. 'scratch' is returned as is.

        Args:
            content: Build file text

        Returns:
            Image references in file order
        """
        base_images = []
        stage_names = set()

        for line in content.splitlines():
            if not line.startswith(FROM_INSTRUCTION):
                continue

            remainder = line[len(FROM_INSTRUCTION):]
            # FROMAGE is not FROM
            if remainder and not remainder[0].isspace():
                continue

            words = remainder.split()
            while words and words[0].startswith("--"):
                words.pop(0)

            stage_name = None
            if len(words) >= 3 and words[-2].upper() == "AS":
                stage_name = words[-1]
                words = words[:-2]

            if not words:
                self.logger.debug(f"Ignoring FROM line without image: {line!r}")
                continue

            image_reference = " ".join(words)

            if image_reference.lower() in stage_names:
                self.logger.debug(f"Skipping reference to build stage {image_reference}")
            else:
                base_images.append(image_reference)

            if stage_name:
                stage_names.add(stage_name.lower())

        return base_images
