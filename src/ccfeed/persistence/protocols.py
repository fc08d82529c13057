"""Re-export collaborator protocols from core for convenience."""

from __future__ import annotations

from ccfeed.core.protocols import IPersistenceProvider, IPipelineStateSource

__all__ = ["IPersistenceProvider", "IPipelineStateSource"]
