"""Protocol interfaces for the ccfeed collaborators.

The publisher only talks to these Protocols, so production backends and the
in-memory test doubles are interchangeable without inheritance.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, Sequence, runtime_checkable

from ccfeed.models.feed import Project
from ccfeed.models.pipeline import PipelineSnapshot


# ---------------------------------------------------------------------------
# State Source
# ---------------------------------------------------------------------------

@runtime_checkable
class IPipelineStateSource(Protocol):
    """Source of point-in-time pipeline snapshots (CodePipeline or fakes).

    ``remaining`` returns the seconds left in the cycle budget; sources that
    make several requests stop once it reaches zero.
    """

    def fetch_pipeline_states(
        self, remaining: Optional[Callable[[], float]] = None
    ) -> list[PipelineSnapshot]: ...


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

@runtime_checkable
class IPersistenceProvider(Protocol):
    """Atomic sink for the encoded feed (S3 object, local file, memory)."""

    def persist_projects(self, projects: Sequence[Project]) -> None: ...
