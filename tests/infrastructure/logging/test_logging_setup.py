"""日志配置测试"""

import logging

from infrastructure.config.settings import Settings
from infrastructure.logging.setup import setup_logging


class TestSetupLogging:
    """setup_logging 测试"""

    def test_level_from_settings(self):
        """测试日志级别来自配置"""
        logger = logging.getLogger("test.setup.level")
        setup_logging(Settings(_env_file=None, log_level="warning"), logger=logger)

        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1

    def test_debug_overrides_level(self):
        """测试 debug 模式强制 DEBUG 级别"""
        logger = logging.getLogger("test.setup.debug")
        setup_logging(Settings(_env_file=None, debug=True, log_level="ERROR"), logger=logger)

        assert logger.level == logging.DEBUG

    def test_repeated_setup_does_not_stack_handlers(self):
        """测试重复调用不叠加 handler"""
        logger = logging.getLogger("test.setup.repeat")
        settings = Settings(_env_file=None)

        setup_logging(settings, logger=logger)
        setup_logging(settings, logger=logger)

        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path):
        """测试配置日志文件时写入文件"""
        log_file = tmp_path / "logs" / "app.log"
        logger = logging.getLogger("test.setup.file")
        setup_logging(Settings(_env_file=None, log_file=str(log_file)), logger=logger)

        logger.warning("hello")
        for handler in logger.handlers:
            handler.flush()

        assert log_file.exists()
        assert "hello" in log_file.read_text(encoding="utf-8")

        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
