"""
Logging setup shared by the API process and the test suite
"""

import logging

from pythonjsonlogger.json import JsonFormatter

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO", log_format: str = "text") -> None:
    """Attach a single console handler to the root logger.

    With ``log_format="json"`` records are emitted as JSON objects, so the
    ``extra`` context passed by the route handlers (operation, order_id,
    request_id, ...) shows up as individual fields.
    """
    root = logging.getLogger()
    if root.handlers:
        # Already configured (uvicorn, pytest or a second create_app call)
        root.setLevel(getattr(logging, level.upper(), logging.INFO))
        return

    handler = logging.StreamHandler()
    if log_format.lower() == "json":
        handler.setFormatter(JsonFormatter(JSON_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
