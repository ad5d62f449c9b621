"""信封地址格式化

结构化地址记录（用于展示）与扁平字符串（用于提交服务器）之间的转换。
本模块中的函数均为纯同步函数。
"""

import copy
from typing import Any, Dict, Iterable, List, Mapping, MutableMapping, Optional, Sequence, Union

from domain.mail.value_objects.email_address import ADDRESS_FIELDS, RECIPIENT_FIELDS, EmailAddress

AddressValue = Union[str, Sequence[EmailAddress], Sequence[Mapping[str, Any]], None]


def format_full_address(address: EmailAddress) -> str:
    """
    生成地址的完整展示形式

    有不同于地址本身的显示名称时返回 "name <email>"，否则返回 "<email>"。
    """
    if address.has_distinct_name:
        return f"{address.name} <{address.email}>"
    return f"<{address.email}>"


def format_full_addresses(addresses: Mapping[str, Optional[Iterable[EmailAddress]]]) -> None:
    """
    为所有地址字段中的每条记录计算 full

    幂等：重复调用结果不变。

    Args:
        addresses: 字段名到地址记录列表的映射
    """
    for field_name in ADDRESS_FIELDS:
        for address in addresses.get(field_name) or ():
            address.full = format_full_address(address)


def short_address(records: Optional[Sequence[EmailAddress]]) -> str:
    """
    返回第一条记录的简短描述

    优先返回显示名称，其次返回地址；字段为空时返回空字符串。
    """
    if not records:
        return ""
    first = records[0]
    return first.name or first.email or ""


def _text_of(record: Union[str, EmailAddress, Mapping[str, Any]]) -> Optional[str]:
    # 已经扁平化过的字段原样保留
    if isinstance(record, str):
        return record
    if isinstance(record, EmailAddress):
        return record.text
    return record.get("text")


def flatten_recipients(data: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """
    将编辑快照中的收件人字段替换为传输字符串列表

    每个存在的收件人字段由地址记录列表变为各记录 text 组成的列表，
    顺序保持不变。直接修改并返回传入的映射。

    Args:
        data: 编辑快照

    Returns:
        同一个映射对象
    """
    for field_name in RECIPIENT_FIELDS:
        records = data.get(field_name)
        if records:
            data[field_name] = [_text_of(record) for record in records]
    return data


def flattened_copy(data: Mapping[str, Any]) -> Dict[str, Any]:
    """返回编辑快照的深拷贝，并对拷贝执行 flatten_recipients"""
    result = copy.deepcopy(dict(data))
    flatten_recipients(result)
    return result


def _display_of(record: Union[str, EmailAddress, Mapping[str, Any]]) -> str:
    if isinstance(record, str):
        return record
    if not isinstance(record, EmailAddress):
        record = EmailAddress.from_dict(record)
    return record.text or record.full or format_full_address(record)


def split_address_list(value: AddressValue) -> List[str]:
    """
    将地址字段拆分为去除首尾空白的字符串列表

    字符串按逗号拆分；结构化记录列表先渲染为各记录的传输形式
    （text，其次 full，再次 "name <email>"）。
    """
    if not value:
        return []
    if isinstance(value, str):
        components = value.split(",")
    else:
        components = [_display_of(record) for record in value]
    return [component.strip() for component in components if component.strip()]


def join_address_list(value: AddressValue) -> str:
    """将地址字段规范化为逗号连接的单个字符串"""
    return ", ".join(split_address_list(value))
