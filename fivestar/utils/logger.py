import logging

PACKAGE_LOGGER = "fivestar"
LOG_FORMAT = "[%(asctime)s] %(levelname)s — %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _package_logger() -> logging.Logger:
    root = logging.getLogger(PACKAGE_LOGGER)
    if root.handlers:
        return root

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root.addHandler(handler)
    root.setLevel(logging.INFO)
    return root


def get_logger(name: str) -> logging.Logger:
    """
    Logger under the package namespace.

    The stream handler lives on the "fivestar" logger only; module
    loggers propagate to it, so nothing is printed twice.
    """
    _package_logger()
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def set_log_level(level) -> None:
    """Accepts logging constants or names ("DEBUG")."""
    _package_logger().setLevel(level)
