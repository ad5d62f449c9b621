"""
日志配置

使用标准 logging，日志级别和日志文件由 Settings 决定。
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from infrastructure.config.settings import Settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s - %(message)s"

# 日志文件滚动：单文件 10MB，保留 5 个
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5


def setup_logging(settings: Settings, logger: Optional[logging.Logger] = None) -> logging.Logger:
    """
    配置日志

    Args:
        settings: 应用配置
        logger: 要配置的日志记录器，默认为根日志记录器

    Returns:
        配置后的日志记录器
    """
    target = logger or logging.getLogger()
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    target.setLevel(level)

    # 重复调用时不叠加 handler
    for handler in list(target.handlers):
        target.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    target.addHandler(console)

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        target.addHandler(file_handler)

    # httpx 每个请求都会打 INFO 日志
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
    return target
