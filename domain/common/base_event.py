"""领域事件基类"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4


@dataclass(frozen=True)
class DomainEvent:
    """
    领域事件基类

    Attributes:
        aggregate_id: 产生事件的聚合标识
        event_id: 事件唯一标识
        occurred_at: 事件发生时间
    """

    aggregate_id: Any = None
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def event_name(self) -> str:
        """事件名称（类名）"""
        return type(self).__name__
