import logging
import sys
from typing import Optional

from .settings import Settings


def setup_logging(config: Optional[Settings] = None) -> None:
    """Send log records to stdout at ``LOG_LEVEL``; ``studio.*`` loggers follow it."""
    if config is None:
        from .settings import settings as default_config
        config = default_config

    level = getattr(logging, config.log_level.upper(), logging.INFO)
    # basicConfig is a no-op once the root logger has handlers (e.g. under uvicorn),
    # so the studio logger level is set on its own as well
    logging.basicConfig(level=level,
                        format='%(levelname)s %(name)s: %(message)s',
                        handlers=[logging.StreamHandler(sys.stdout)])
    logging.getLogger("studio").setLevel(level)
