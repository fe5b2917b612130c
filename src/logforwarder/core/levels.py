"""TRACE log level.

High-verbosity level below DEBUG, used for full request and response
payloads.

Example:
    from logforwarder.core.levels import TRACE

    logger.log(TRACE, "Request body: %s", body)
"""

from __future__ import annotations

import logging
from typing import Final

TRACE: Final[int] = 5

logging.addLevelName(TRACE, "TRACE")
