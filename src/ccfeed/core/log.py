"""Logging setup shared by the Lambda handler and the CLI."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Configure the root logger.

    The Lambda runtime installs its own handler on the root logger, in which
    case only the level is applied.
    """
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    root.setLevel(level.upper() if isinstance(level, str) else level)
    # botocore is chatty at DEBUG
    logging.getLogger("botocore").setLevel(max(root.level, logging.INFO))
