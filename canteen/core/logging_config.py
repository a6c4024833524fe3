import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the service and its scripts."""
    root = logging.getLogger()
    root.setLevel(level.upper())

    # Keep re-imports (uvicorn reload, tests) from stacking handlers
    if not any(getattr(h, "_canteen", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._canteen = True
        root.addHandler(handler)
