"""邮件远端存储接口"""

from typing import Any, Dict, Mapping, Protocol


class MailResource(Protocol):
    """
    邮件 REST 资源接口

    定义访问远端邮箱存储的契约，具体实现在基础设施层。
    所有方法失败时抛出 TransportFailure。
    """

    async def fetch(self, id: str, view: str) -> Dict[str, Any]:
        """
        获取邮件的某种表示

        Args:
            id: 邮件绝对路径
            view: 表示类型（"view" 或 "edit"）

        Returns:
            服务器返回的数据
        """
        ...

    async def save(self, id: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        保存数据

        Returns:
            服务器返回的数据，成功时至少包含 uid
        """
        ...

    async def post(self, id: str, action: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        对邮件执行动作（如 "send"）

        Returns:
            服务器返回的数据，包含 status 字段
        """
        ...
