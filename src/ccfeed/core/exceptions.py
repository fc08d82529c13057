"""ccfeed exception hierarchy."""

from __future__ import annotations


class CCFeedError(Exception):
    """Base exception for all ccfeed errors."""


class ConfigurationError(CCFeedError):
    """Required configuration is missing or invalid at startup."""


class FetchError(CCFeedError):
    """The pipeline state source was unreachable or rejected the request."""


class AggregationPreconditionError(CCFeedError):
    """Snapshot input violates the aggregator's contract."""


class PersistError(CCFeedError):
    """The feed could not be committed to its destination."""

    def __init__(self, target: str, message: str) -> None:
        self.target = target
        super().__init__(f"unable to persist feed to {target}: {message}")


class DeadlineExceededError(CCFeedError):
    """The cycle budget ran out before a step could start."""

    def __init__(self, stage: str, budget_seconds: float) -> None:
        self.stage = stage
        self.budget_seconds = budget_seconds
        super().__init__(f"cycle deadline of {budget_seconds:g}s exceeded before {stage}")


class CycleFailedError(CCFeedError):
    """A publish cycle failed at a given stage."""

    def __init__(self, stage: str, error: Exception) -> None:
        self.stage = stage
        self.error = error
        super().__init__(f"cycle failed while {stage}: {error}")
