"""Local file backend implementing IPersistenceProvider."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Sequence

from ccfeed.core.exceptions import PersistError
from ccfeed.feed.encoder import encode_projects
from ccfeed.models.feed import Project

logger = logging.getLogger(__name__)


def atomic_write_bytes(path: Path, data: bytes, mode: int = 0o644) -> None:
    """Replace ``path`` with ``data`` so readers see either the old or new file.

    The data goes to a temp file in the same directory, is fsynced, then
    renamed over the target; the directory is fsynced afterwards so the
    rename itself survives a crash.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    _fsync_dir(path.parent)


def _fsync_dir(directory: Path) -> None:
    try:
        dir_fd = os.open(directory, os.O_RDONLY)
    except OSError:
        # not supported on every platform (e.g. Windows)
        return
    try:
        os.fsync(dir_fd)
    finally:
        os.close(dir_fd)


class FileFeedStore:
    """Publish the feed to a local file via write-to-temp then rename."""

    def __init__(self, path: str | os.PathLike[str], mode: int = 0o644) -> None:
        self._path = Path(path)
        self._mode = mode

    @property
    def target(self) -> str:
        return str(self._path)

    def persist_projects(self, projects: Sequence[Project]) -> None:
        data = encode_projects(projects)
        try:
            atomic_write_bytes(self._path, data, self._mode)
        except OSError as exc:
            raise PersistError(self.target, str(exc)) from exc
        logger.info("Wrote %d projects (%d bytes) to %s", len(projects), len(data), self.target)
