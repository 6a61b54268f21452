"""Logging for the diaspora* pod client.

The library only ever logs through ``log``; handlers are installed by the
command-line front end (or by the embedding application), never on import.
"""

import logging

try:
    import colorlog
    _COLORLOG_AVAILABLE = True
except ImportError:
    _COLORLOG_AVAILABLE = False

log = logging.getLogger("diaspora-api")

_LOG_COLORS = {
    "DEBUG":    "cyan",
    "INFO":     "green",
    "WARNING":  "yellow",
    "ERROR":    "red",
    "CRITICAL": "bold_red",
}


def _setup_logging(debug: bool = False) -> None:
    """Attach a single stream handler to the package logger.

    With *debug* the urllib3 connection pool chatter is let through as well,
    which is where redirects and TLS problems show up first.
    """
    log.setLevel(logging.DEBUG if debug else logging.INFO)
    log.handlers.clear()
    log.propagate = False

    if _COLORLOG_AVAILABLE:
        handler = colorlog.StreamHandler()
        handler.setFormatter(colorlog.ColoredFormatter(
            "%(log_color)s%(asctime)s [%(levelname)s]%(reset)s %(message)s",
            datefmt="%H:%M:%S",
            log_colors=_LOG_COLORS,
        ))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s", datefmt="%H:%M:%S"
        ))
    log.addHandler(handler)

    logging.getLogger("urllib3").setLevel(logging.DEBUG if debug else logging.WARNING)


def mask_secret(value: "str | None", keep: int = 6) -> str:
    """Shorten a token for log output: ``'abcdef…'``."""
    if not value:
        return "<none>"
    if len(value) <= keep:
        return "…"
    return value[:keep] + "…"
