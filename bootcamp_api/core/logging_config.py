"""
Logging setup shared by the API process and scripts.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a stdout handler to the root logger at the given level."""
    root = logging.getLogger()
    root.setLevel(level.upper())

    # Avoid duplicate handlers when the app is created more than once (tests)
    for handler in root.handlers:
        if getattr(handler, "_bootcamp_api", False):
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._bootcamp_api = True
    root.addHandler(handler)

    logging.getLogger("pymongo").setLevel(logging.WARNING)
