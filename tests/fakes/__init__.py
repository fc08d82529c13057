"""Shared test doubles: re-export memory backends."""

from __future__ import annotations

from ccfeed.persistence.memory_backend import MemoryFeedStore
from ccfeed.sources.memory_backend import MemoryStateSource

__all__ = ["MemoryFeedStore", "MemoryStateSource"]
