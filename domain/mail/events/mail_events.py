"""邮件领域事件

由 Message 实体在状态变化后分发给订阅者，用于刷新展示状态。
事件在实体完成合并之后才分发，订阅者看到的总是完整的实体。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from domain.common.base_event import DomainEvent


@dataclass(frozen=True)
class MessageHydrated(DomainEvent):
    """
    邮件数据加载完成事件

    Attributes:
        aggregate_id: 邮件绝对路径（Message.id）
        uid: 加载后的 UID
    """

    uid: int = -1


@dataclass(frozen=True)
class MessageHydrationFailed(DomainEvent):
    """
    邮件远端请求失败事件

    Attributes:
        aggregate_id: 失败时的邮件绝对路径（可能为空）
        error: 服务器返回的错误信息
        operation: 失败的操作（load/edit/save/send）
    """

    error: Optional[Any] = None
    operation: str = "load"


@dataclass(frozen=True)
class MessageRenumbered(DomainEvent):
    """
    邮件 UID 变更事件（草稿保存后获得持久 UID）

    Attributes:
        aggregate_id: 新的邮件绝对路径
        old_uid: 旧 UID，未分配时为 -1
        new_uid: 新 UID
    """

    old_uid: int = -1
    new_uid: int = -1


@dataclass(frozen=True)
class MessageSent(DomainEvent):
    """
    邮件发送成功事件

    Attributes:
        aggregate_id: 发送时使用的草稿路径
        response: 服务器响应
    """

    response: Dict[str, Any] = field(default_factory=dict)
