"""Process-wide logging configuration."""

import logging

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a stream handler to the root logger at ``level``."""

    logging.basicConfig(level=level, format=_FORMAT)
    logging.getLogger().setLevel(level)
    # APScheduler logs every job execution at INFO.
    logging.getLogger("apscheduler").setLevel(max(logging.WARNING, logging.getLogger().level))
