"""
依赖注入容器

使用示例：
    from infrastructure.containers import bootstrap

    boot = bootstrap()
    loader = boot.app.message_loader()
"""

from dataclasses import dataclass
from typing import Optional

from dependency_injector import providers

from infrastructure.config.settings import Settings
from infrastructure.containers.application import AppContainer
from infrastructure.containers.config import ConfigContainer
from infrastructure.containers.infrastructure import InfraContainer
from infrastructure.logging.setup import setup_logging


@dataclass
class Bootstrap:
    """已装配的容器集合"""

    config: ConfigContainer
    infra: InfraContainer
    app: AppContainer


def bootstrap(settings: Optional[Settings] = None, configure_logging: bool = True) -> Bootstrap:
    """
    装配所有容器

    Args:
        settings: 覆盖默认配置（测试时使用）
        configure_logging: 是否根据配置初始化日志

    Returns:
        Bootstrap 实例
    """
    config = ConfigContainer()
    if settings is not None:
        config.settings.override(providers.Object(settings))

    infra = InfraContainer(config=config)
    app = AppContainer(config=config, infra=infra)

    if configure_logging:
        setup_logging(config.settings())

    return Bootstrap(config=config, infra=infra, app=app)


__all__ = [
    "AppContainer",
    "Bootstrap",
    "ConfigContainer",
    "InfraContainer",
    "bootstrap",
]
