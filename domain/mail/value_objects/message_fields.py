"""邮件可序列化字段"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from domain.mail.value_objects.email_address import ADDRESS_FIELDS, EmailAddress

UNASSIGNED_UID = -1
"""UID 未分配时的哨兵值"""

# 服务器字段名 -> 属性名，仅白名单内的字段会被合并
SCALAR_WIRE_FIELDS: Dict[str, str] = {
    "uid": "uid",
    "draftId": "draft_id",
    "subject": "subject",
    "date": "date",
    "size": "size",
    "flags": "flags",
    "content": "content",
    "attachmentAttrs": "attachment_attrs",
}


@dataclass
class PersistedFields:
    """
    邮件的持久化字段

    只包含可以在服务器与客户端之间往返的数据，
    运行时状态（邮箱引用、加载状态、错误标志等）不在此处。

    Attributes:
        uid: 邮箱内的持久序号，未分配时为 -1
        draft_id: 未发送草稿的临时 ID
        subject: 主题
        date: 日期（服务器格式化后的字符串）
        size: 大小
        flags: IMAP 标志
        content: 正文（已由服务器清理的 HTML）
        attachment_attrs: 附件描述
        addresses: 地址字段名（from/to/cc/bcc/reply-to）到地址记录列表的映射
    """

    uid: int = UNASSIGNED_UID
    draft_id: Optional[str] = None
    subject: str = ""
    date: Optional[str] = None
    size: Optional[int] = None
    flags: List[str] = field(default_factory=list)
    content: str = ""
    attachment_attrs: List[Dict[str, Any]] = field(default_factory=list)
    addresses: Dict[str, List[EmailAddress]] = field(default_factory=dict)

    def to_wire(self) -> Dict[str, Any]:
        """转换为服务器字段名的字典（不含地址字段）"""
        result: Dict[str, Any] = {}
        for wire_name, attribute in SCALAR_WIRE_FIELDS.items():
            value = getattr(self, attribute)
            if value is not None:
                result[wire_name] = value
        return result


def _to_address_records(value: Any) -> List[EmailAddress]:
    if not value:
        return []
    if isinstance(value, str):
        return [EmailAddress(email=part.strip()) for part in value.split(",") if part.strip()]
    records = []
    for item in value:
        if isinstance(item, EmailAddress):
            records.append(item)
        else:
            records.append(EmailAddress.from_dict(item))
    return records


def merge_remote(fields: PersistedFields, patch: Optional[Mapping[str, Any]]) -> PersistedFields:
    """
    将服务器数据合并到持久化字段

    只合并白名单内的已知字段，未知字段被忽略，
    地址字段转换为 EmailAddress 记录。

    Args:
        fields: 待更新的字段
        patch: 服务器返回的数据

    Returns:
        同一个 fields 对象
    """
    if not patch:
        return fields

    for wire_name, attribute in SCALAR_WIRE_FIELDS.items():
        if wire_name not in patch:
            continue
        value = patch[wire_name]
        if wire_name == "uid":
            value = UNASSIGNED_UID if value is None else int(value)
        setattr(fields, attribute, value)

    for field_name in ADDRESS_FIELDS:
        if field_name in patch:
            fields.addresses[field_name] = _to_address_records(patch[field_name])

    return fields
