"""
Logging setup shared by the server and the CLI.

Log records go through Rich so that server output matches the CLI's
console styling.
"""

import logging

from rich.logging import RichHandler

# Loggers that would otherwise print the request URL, which carries the API key
_QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str = "INFO") -> None:
    """
    Configure the root logger.

    Safe to call more than once; handlers installed by a previous call
    are replaced.

    Args:
        level: Name of the root logging level.
    """
    handler = RichHandler(rich_tracebacks=True, show_path=False, log_time_format="[%X]")
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing, RichHandler):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
