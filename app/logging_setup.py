import logging
import sys

_configured = False

# Third-party loggers that are only interesting when something goes wrong
_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "passlib")


def setup_logging(level="INFO"):
    """Configure root logging with a single stderr handler.

    Safe to call more than once; only the first call installs the handler.
    """
    global _configured
    if _configured:
        return

    root = logging.getLogger()
    root.setLevel(level.upper() if isinstance(level, str) else level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
    _configured = True
