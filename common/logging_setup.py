"""
common.logging_setup

Set up standard logging for the project.
"""
import logging
import sys


def setup_logging(level=logging.INFO):
    # stderr keeps stdout free for the JSON output
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
