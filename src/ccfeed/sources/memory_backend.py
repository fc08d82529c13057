"""In-memory state source for unit tests."""

from __future__ import annotations

from typing import Callable, Iterable

from ccfeed.core.exceptions import FetchError
from ccfeed.models.pipeline import PipelineSnapshot


class MemoryStateSource:
    """Canned-response IPipelineStateSource.

    ``on_fetch`` runs before the snapshots are returned, which lets tests
    advance a fake clock to simulate a slow source.
    """

    def __init__(self, snapshots: Iterable[PipelineSnapshot] = (),
                 error: Exception | None = None,
                 on_fetch: Callable[[], None] | None = None) -> None:
        self._snapshots = list(snapshots)
        self._error = error
        self._on_fetch = on_fetch
        self.calls = 0
        self.remaining: Callable[[], float] | None = None

    def set_snapshots(self, snapshots: Iterable[PipelineSnapshot]) -> None:
        self._snapshots = list(snapshots)

    def fail_with(self, error: Exception | None) -> None:
        self._error = error

    def fetch_pipeline_states(
        self, remaining: Callable[[], float] | None = None
    ) -> list[PipelineSnapshot]:
        self.calls += 1
        self.remaining = remaining
        if self._on_fetch is not None:
            self._on_fetch()
        if self._error is not None:
            raise FetchError(str(self._error)) from self._error
        return list(self._snapshots)
