import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """Root logger to stdout; replaces existing handlers to avoid duplicates under reload"""
    root = logging.getLogger()
    root.setLevel(level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt="%(asctime)s %(levelname)s %(name)s %(message)s"))
    root.handlers = [handler]
