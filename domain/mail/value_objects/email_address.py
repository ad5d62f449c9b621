"""邮件地址值对象"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

# 信封中所有地址字段
ADDRESS_FIELDS = ("from", "to", "cc", "bcc", "reply-to")

# 可编辑的收件人字段（发件人不在其中）
RECIPIENT_FIELDS = ("to", "cc", "bcc", "reply-to")


@dataclass
class EmailAddress:
    """
    邮件地址记录

    信封地址字段（from/to/cc/bcc/reply-to）中的单条记录。
    full 为展示用的派生字符串，text 为提交服务器时使用的扁平字符串。

    Attributes:
        email: 邮件地址
        name: 显示名称（可选）
        full: 完整展示形式，如 "Name <email>"（派生）
        text: 传输形式（编辑快照中由服务器提供）
    """

    email: str = ""
    name: Optional[str] = None
    full: Optional[str] = None
    text: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EmailAddress":
        """从服务器返回的字典创建地址记录"""
        return cls(
            email=data.get("email") or "",
            name=data.get("name"),
            full=data.get("full"),
            text=data.get("text"),
        )

    def to_dict(self) -> Dict[str, str]:
        """转换为字典，省略空字段"""
        result = {"email": self.email}
        if self.name:
            result["name"] = self.name
        if self.full:
            result["full"] = self.full
        if self.text:
            result["text"] = self.text
        return result

    @property
    def has_distinct_name(self) -> bool:
        """显示名称存在且与地址不同"""
        return bool(self.name) and self.name != self.email
