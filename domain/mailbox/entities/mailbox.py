"""邮箱（文件夹）实体"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from domain.common.base_entity import BaseEntity
from domain.common.exceptions import InvalidOperationException


@dataclass(eq=False)
class Mailbox(BaseEntity):
    """
    邮箱实体

    只建模邮件实体依赖的部分：层级路径和 UID 到列表槽位的索引。

    Attributes:
        account_id: 所属邮件账号 ID
        path: 路径组件，如 ["INBOX", "Archive"]
        uids_map: UID 到邮箱内槽位的映射，邮件重新编号时由邮件实体更新
    """

    account_id: str = field(default="")
    path: List[str] = field(default_factory=list)
    uids_map: Dict[int, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """初始化后验证"""
        if isinstance(self.path, str):
            self.path = self.path.split("/")
        self._validate()

    def _validate(self) -> None:
        if not self.path or not all(self.path):
            raise InvalidOperationException(
                operation="create_mailbox",
                reason="Mailbox path cannot be empty or contain empty components"
            )

    @classmethod
    def create(
        cls,
        account_id: str,
        path: Union[str, List[str]],
        uids_map: Optional[Dict[int, Any]] = None,
    ) -> "Mailbox":
        """
        工厂方法：创建邮箱

        Args:
            account_id: 邮件账号 ID
            path: 路径组件列表，或以 "/" 分隔的字符串
            uids_map: 初始 UID 索引（可选）

        Returns:
            Mailbox 实例
        """
        return cls(account_id=account_id, path=path, uids_map=dict(uids_map or {}))

    @property
    def name(self) -> str:
        """邮箱名称（最后一个路径组件）"""
        return self.path[-1]

    def move_slot(self, old_uid: int, new_uid: int) -> None:
        """
        将槽位引用从旧 UID 移到新 UID

        旧键被清空（置为 None），不会继续指向有效记录。
        """
        self.uids_map[new_uid] = self.uids_map.get(old_uid)
        self.uids_map[old_uid] = None
        self.update_timestamp()
