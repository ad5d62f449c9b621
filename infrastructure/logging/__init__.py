"""日志基础设施模块"""

from infrastructure.logging.setup import setup_logging

__all__ = ["setup_logging"]
