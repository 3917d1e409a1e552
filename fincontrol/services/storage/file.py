"""
JSON File Storage Implementation

DESIGN DECISION: Each key is one UTF-8 file in a data directory.
The file is rewritten wholesale on every save, mirroring how the
dataset itself is read-modify-rewritten.

Writes go to a temporary file first and are moved into place with
os.replace, so a crash mid-write never leaves a half-written blob.
Transient OS errors are retried with exponential backoff.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from tenacity import (
    RetryError,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from fincontrol.services.storage.interface import (
    KeyValueStorage,
    StorageReadError,
    StorageWriteError,
)


FILE_SUFFIX = ".json"


class JsonFileStorage(KeyValueStorage):
    """
    File-backed key-value storage.

    The directory is created lazily on the first write.
    """

    def __init__(
        self,
        directory: Union[str, Path],
        write_attempts: int = 3,
    ):
        """
        Args:
            directory: Where the key files live
            write_attempts: How many times a failed write is tried
        """
        self._directory = Path(directory)
        self._write_attempts = write_attempts

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        """File path used for a key."""
        if not key or "/" in key or "\\" in key or key in {".", ".."}:
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._directory / f"{key}{FILE_SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Failed to read {path}: {e}")

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        writer = retry(
            retry=retry_if_exception_type(OSError),
            stop=stop_after_attempt(self._write_attempts),
            wait=wait_exponential(multiplier=0.05, min=0.05, max=1),
        )(self._write)
        try:
            writer(path, value)
        except RetryError as e:
            raise StorageWriteError(
                f"Failed to write {path}: {e.last_attempt.exception()}"
            )

    def remove(self, key: str) -> bool:
        path = self.path_for(key)
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageWriteError(f"Failed to remove {path}: {e}")

    def _write(self, path: Path, value: str) -> None:
        """Write atomically: temp file in the same directory, then replace."""
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.stem}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, path)
        except OSError:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
