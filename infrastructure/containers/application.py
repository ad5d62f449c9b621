"""
应用容器（AppContainer）

管理应用层组件。
依赖 InfraContainer 获取基础设施。
"""

from dependency_injector import containers, providers

from application.mail.services.message_loader import MessageLoader


class AppContainer(containers.DeclarativeContainer):
    """应用容器 - 管理应用层服务"""

    # 依赖配置容器
    config = providers.DependenciesContainer()

    # 依赖基础设施容器
    infra = providers.DependenciesContainer()

    # ============ 应用服务 ============

    # 邮件加载服务
    message_loader = providers.Factory(
        MessageLoader,
        resource=infra.mail_resource,
    )
