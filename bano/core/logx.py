import logging
import sys

from bano.core.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str = "bano") -> logging.Logger:
    """
    返回项目统一使用的 logger，只在第一次调用时挂载 handler
    """
    _logger = logging.getLogger(name)
    if not _logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        _logger.addHandler(handler)
        _logger.propagate = False
    _logger.setLevel(settings.LOG_LEVEL.upper())
    return _logger


logger = setup_logger()
