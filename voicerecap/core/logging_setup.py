"""Process-wide logging configuration.

Console-only: recordings are not persisted, so neither are logs.
"""

import logging

_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
_HANDLER_NAME = "voicerecap_stream"


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stream handler to the ``voicerecap`` logger.

    Safe to call repeatedly (e.g. once per ``create_app()`` in tests);
    the handler is only added the first time.

    Args:
        level: Logging level name such as "DEBUG" or "INFO".
    """
    logger = logging.getLogger("voicerecap")
    logger.setLevel(level.upper())

    if any(h.name == _HANDLER_NAME for h in logger.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT, "%H:%M:%S"))
    handler.name = _HANDLER_NAME
    logger.addHandler(handler)
