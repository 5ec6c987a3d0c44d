"""
Filesystem backed store for fingerprints, one small text file per record.
"""
import os
import re
import tempfile
from pathlib import Path
from typing import Optional
import logging

# Anything that is not an ASCII letter, digit or literal dot
_INVALID_KEY_CHARS = re.compile(r'[^A-Za-z0-9.]+')


class DigestStore:
    """Reads and writes fingerprint records inside a single directory"""

    def __init__(self, store_dir: Path):
        """
        Initialize digest store.

        Args:
            store_dir: Directory holding the record files
        """
        self.store_dir = Path(store_dir)
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def derive_image_key(image_reference: str, suffix: str = "-digest.txt") -> str:
        """
        Derive the record filename for a base image.

        Every run of characters other than letters, digits and dots becomes a
        single underscore, suffix included. References that only differ in
        such runs ('a:b' and 'a/b') share a record.

        Args:
            image_reference: Image reference as written after FROM
            suffix: Appended before sanitising

        Returns:
            Filename such as 'ubuntu_22.04_digest.txt'
        """
        return _INVALID_KEY_CHARS.sub('_', f"{image_reference}{suffix}")

    def get_record_path(self, key: str) -> Path:
        """Get path to the record file for a key"""
        return self.store_dir / key

    def has_record(self, key: str) -> bool:
        return self.get_record_path(key).is_file()

    def read_stored(self, key: str) -> Optional[str]:
        """
        Read a stored fingerprint.

        Args:
            key: Record filename

        Returns:
            Stored value without trailing newlines, or None if there is no record
        """
        record_path = self.get_record_path(key)

        if not record_path.is_file():
            self.logger.debug(f"No record at {record_path}")
            return None

        with open(record_path, 'r', encoding='utf-8') as f:
            return f.read().rstrip('\n')

    def write_stored(self, key: str, value: str) -> Path:
        """
        Overwrite a stored fingerprint.

        The value is written to a temporary file next to the record and
        moved into place. There is no locking between processes.

        Args:
            key: Record filename
            value: Fingerprint to store

        Returns:
            Path of the record file
        """
        record_path = self.get_record_path(key)
        self.store_dir.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(dir=self.store_dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(f"{value}\n")
            os.replace(tmp_path, record_path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

        self.logger.debug(f"Wrote record {record_path}")
        return record_path
