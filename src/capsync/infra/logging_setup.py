from __future__ import annotations

import logging

from capsync.infra.config import AppConfig

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(config: AppConfig, *, verbose: bool = False) -> None:
    """Configure root handlers once and set the capsync logger level."""
    level = logging.DEBUG if verbose else getattr(logging, config.log_level)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
    logging.getLogger("capsync").setLevel(level)
