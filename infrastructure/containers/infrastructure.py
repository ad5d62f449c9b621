"""
基础设施容器（InfraContainer）

管理所有基础设施组件：远端邮件资源等。
依赖 ConfigContainer 获取配置。
"""

from dependency_injector import containers, providers

from infrastructure.mail.services.http_mail_resource import HttpMailResource


class InfraContainer(containers.DeclarativeContainer):
    """基础设施容器 - 管理技术实现"""

    # 依赖配置容器
    config = providers.DependenciesContainer()

    # ============ 邮件资源 ============

    # HTTP 邮件资源（单例，共享连接池）
    mail_resource = providers.Singleton(
        HttpMailResource,
        base_url=config.settings.provided.mail_resource_url,
        timeout=config.settings.provided.mail_request_timeout,
        retry_intervals=config.settings.provided.mail_fetch_retry_intervals,
    )
