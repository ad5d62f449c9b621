"""
应用配置管理

使用 pydantic-settings 管理环境变量和配置
"""

from typing import List, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    应用配置类

    自动从环境变量和 .env 文件读取配置
    """

    # ========== 应用环境 ==========
    app_env: Literal["test", "dev", "staging", "prod"] = "dev"
    app_name: str = "MailClient"
    app_version: str = "1.0.0"
    debug: bool = False

    # ========== 邮件服务配置 ==========
    # 邮件模块基础 URL，如 https://mail.example.com/SOGo/so
    mail_base_url: str = "http://localhost:20000/SOGo/so"
    # 当前登录用户（拼接在基础 URL 之后）
    mail_active_user: str = ""
    # 单次请求超时（秒）
    mail_request_timeout: float = 30.0
    # GET 请求网络错误重试间隔（秒），为空则不重试
    mail_fetch_retry_intervals: List[float] = [1.0, 5.0]

    # ========== 日志配置 ==========
    log_level: str = "INFO"
    log_file: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # 忽略未定义的环境变量
    )

    @property
    def is_test(self) -> bool:
        """是否为测试环境"""
        return self.app_env == "test"

    @property
    def is_dev(self) -> bool:
        """是否为开发环境"""
        return self.app_env == "dev"

    @property
    def is_prod(self) -> bool:
        """是否为生产环境"""
        return self.app_env == "prod"

    @property
    def mail_resource_url(self) -> str:
        """当前用户的邮件资源根 URL"""
        base = self.mail_base_url.rstrip("/")
        if self.mail_active_user:
            return f"{base}/{self.mail_active_user}/Mail"
        return f"{base}/Mail"


# 全局配置实例（单例）
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    获取配置实例（单例模式）

    Returns:
        Settings 实例
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
