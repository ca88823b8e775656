"""
xpay_client.logger
------------------
get_logger() hands out the SDK's loggers: one stdout handler per logger,
JSON-shaped lines, UTC timestamps.

Defaults come from the environment so a deployment can tune SDK logging
without code changes:

- XPAY_LOG_LEVEL  level name (DEBUG, INFO, ...), default INFO
- XPAY_LOG_FILE   optional file that receives the same lines
"""

import logging, json, sys, time, os

_FORMAT = json.dumps({
    "ts": "%(asctime)s",
    "level": "%(levelname)s",
    "name": "%(name)s",
    "msg": "%(message)s"
})


def _env_level(default=logging.INFO):
    name = os.getenv("XPAY_LOG_LEVEL", "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    # unknown names come back as the string "Level <name>"
    return level if isinstance(level, int) else default


def get_logger(name="xpay", level=None, to_file=None):
    """Logger for an SDK component; `level` and `to_file` override the environment."""
    logger = logging.getLogger(name)
    logger.setLevel(level if level is not None else _env_level())

    if not logger.handlers:
        formatter = logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%dT%H:%M:%SZ")
        formatter.converter = time.gmtime
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        to_file = to_file or os.getenv("XPAY_LOG_FILE")
        if to_file:
            os.makedirs(os.path.dirname(to_file) or ".", exist_ok=True)
            file_handler = logging.FileHandler(to_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
