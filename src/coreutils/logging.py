import logging
from datetime import datetime
from pathlib import Path
from typing import Optional


def setup_logging(level=logging.INFO, log_dir: Optional[str] = "logs"):
    """Setup basic logging configuration

    Logs go to stderr and, when log_dir is set, to a daily file in log_dir.
    """
    handlers = [logging.StreamHandler()]
    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        handlers.insert(
            0,
            logging.FileHandler(
                Path(log_dir) / f"pipeline_{datetime.now().strftime('%Y-%m-%d')}.log"
            ),
        )

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        handlers=handlers,
    )
    return logging.getLogger(__name__)
