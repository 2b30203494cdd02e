"""Logging for pagemd.

Every module logs through the ``pagemd`` logger. Detection and conversion
decisions (selector hits, removal counts, stage timings) are DEBUG records;
profile fallbacks and tool calls are INFO. Nothing is logged to stdout,
which carries MCP traffic and piped Markdown.
"""

import logging
import sys

from pagemd.config import settings

logger = logging.getLogger("pagemd")


def setup_logging() -> None:
    """Send log records to stderr and set the pagemd level from PAGEMD_DEBUG.

    Root handlers are replaced, so calling this again (e.g. on reload) does
    not duplicate output. Other libraries stay at WARNING.
    """
    logging.root.handlers = []
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    app_log_level = logging.DEBUG if settings.pagemd_debug else logging.INFO
    logger.setLevel(app_log_level)
    logger.info("pagemd logging initialized at %s level", logging.getLevelName(app_log_level))
