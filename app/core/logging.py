# app/core/logging.py
import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure root logging once; later calls only adjust the level."""
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)  # Print logs to console
        ]
    )
    logging.getLogger().setLevel(level.upper())
    return logging.getLogger("student_records")
