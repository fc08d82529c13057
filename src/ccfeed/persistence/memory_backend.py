"""In-memory backend for unit tests."""

from __future__ import annotations

from typing import Sequence

from ccfeed.core.exceptions import PersistError
from ccfeed.feed.encoder import encode_projects
from ccfeed.models.feed import Project


class MemoryFeedStore:
    """IPersistenceProvider that keeps every published document."""

    def __init__(self, target: str = "memory://feed.xml", error: Exception | None = None,
                 timeout: float = 0.0) -> None:
        self.target = target
        self.timeout = timeout
        self._error = error
        self.published: list[bytes] = []
        self.calls = 0

    def fail_with(self, error: Exception | None) -> None:
        """Make the next calls raise ``error`` (``None`` to recover)."""
        self._error = error

    @property
    def latest(self) -> bytes | None:
        return self.published[-1] if self.published else None

    def persist_projects(self, projects: Sequence[Project]) -> None:
        self.calls += 1
        data = encode_projects(projects)
        if self._error is not None:
            raise PersistError(self.target, str(self._error)) from self._error
        self.published.append(data)
