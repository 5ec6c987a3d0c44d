"""
Content fingerprint of the build file.
"""
import hashlib
import logging
from typing import Union

from ..core.enums import HashAlgo

_CHUNK_SIZE = 64 * 1024


class FileHasher:
    """Computes file fingerprints in the text form of coreutils sha*sum"""

    def __init__(self, algorithm: Union[HashAlgo, str] = HashAlgo.SHA256):
        self.algorithm = HashAlgo(algorithm)
        self.logger = logging.getLogger(__name__)

    def compute_file_hash(self, file_path: str) -> str:
        """
        Compute the hex digest of a file's contents.

        Args:
            file_path: Path to file

        Returns:
            Hex digest string
        """
        hash_obj = hashlib.new(self.algorithm.value)
        try:
            with open(file_path, 'rb') as f:
                for chunk in iter(lambda: f.read(_CHUNK_SIZE), b''):
                    hash_obj.update(chunk)
        except OSError as e:
            self.logger.error(f"Failed to compute file hash for {file_path}: {e}")
            raise

        return hash_obj.hexdigest()

    def compute_file_fingerprint(self, file_path: str) -> str:
        """
        Compute the fingerprint stored for the build file.

        Matches a `sha256sum <file>` output line: digest, two spaces, the
        path exactly as given. Renaming the file therefore changes the
        fingerprint even when the content is the same.

        Args:
            file_path: Path to file, as given on the command line

        Returns:
            '<hexdigest>  <file_path>'
        """
        return f"{self.compute_file_hash(file_path)}  {file_path}"
