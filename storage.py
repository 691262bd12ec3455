"""Single-file storage writer used by the /write endpoint."""
import os
from dataclasses import dataclass

FILE_MODE = 0o644


class StorageError(Exception):
    """Writing to the target file failed."""

    def __init__(self, path, cause):
        super().__init__(f"write {path}: {cause}")
        self.path = path
        self.errno = getattr(cause, "errno", None)


@dataclass(frozen=True)
class Writer:
    file_path: str

    def write(self, msg: str) -> None:
        # truncate + overwrite, parent dir must already exist
        data = msg.encode("utf-8")
        try:
            fd = os.open(self.file_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
            with os.fdopen(fd, "wb") as f:
                f.write(data)
        except OSError as e:
            raise StorageError(self.file_path, e) from e


def new_writer(file_path):
    return Writer(file_path=str(file_path))
