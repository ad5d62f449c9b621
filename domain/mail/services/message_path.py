"""邮件路径构造

邮件标识形如::

    accountId/folder<组件1>/folder<组件2>/.../<draftId 或 uid>

其中每个邮箱路径组件经过 to_path_segment 转义。
"""

import re
from typing import Callable, Optional, Sequence, Union

PathEncoder = Callable[[str], str]

FOLDER_PREFIX = "folder"

# 转义顺序固定：下划线必须最先处理，保证映射可逆
_ESCAPES = (
    ("_", "_U_"),
    (".", "_D_"),
    ("#", "_H_"),
    ("@", "_A_"),
    ("*", "_S_"),
    (":", "_C_"),
    (",", "_CO_"),
    (" ", "_SP_"),
    ("'", "_SQ_"),
    ("&", "_AM_"),
    ("+", "_P_"),
)

_LEADING_DIGIT = re.compile(r"^\d")

# 从左到右按 token 还原，"_U_" 不会与其他转义重叠
_UNESCAPES = {escaped: character for character, escaped in _ESCAPES}
_UNESCAPE_PATTERN = re.compile("|".join(re.escape(escaped) for _, escaped in _ESCAPES))


def to_path_segment(component: str) -> str:
    """
    将邮箱路径组件转换为路径安全的标识

    Args:
        component: 邮箱路径组件，如 "INBOX" 或 "Sent Items"

    Returns:
        转义后的标识，如 "Sent_SP_Items"
    """
    segment = component
    for character, escaped in _ESCAPES:
        segment = segment.replace(character, escaped)
    if _LEADING_DIGIT.match(segment):
        segment = "_" + segment
    return segment


def from_path_segment(segment: str) -> str:
    """to_path_segment 的逆操作"""
    if segment.startswith("_") and len(segment) > 1 and segment[1].isdigit():
        segment = segment[1:]
    return _UNESCAPE_PATTERN.sub(lambda match: _UNESCAPES[match.group(0)], segment)


def split_mailbox_path(path: Union[str, Sequence[str]]) -> list:
    """将 "/" 分隔的字符串或组件序列统一为组件列表"""
    if isinstance(path, str):
        return path.split("/")
    return list(path)


def build_absolute_path(
    account_id: str,
    mailbox_path: Union[str, Sequence[str]],
    uid: int,
    draft_id: Optional[str] = None,
    as_draft: bool = False,
    encode: PathEncoder = to_path_segment,
) -> str:
    """
    构造邮件的绝对路径

    Args:
        account_id: 邮件账号 ID
        mailbox_path: 邮箱路径组件
        uid: 邮件 UID
        draft_id: 草稿 ID（可选）
        as_draft: 是否以草稿身份构造；未设置 draft_id 时回退到 uid
        encode: 路径组件转义函数

    Returns:
        绝对路径字符串
    """
    components = [str(account_id)]
    components.extend(FOLDER_PREFIX + encode(component) for component in split_mailbox_path(mailbox_path))
    if as_draft and draft_id:
        components.append(str(draft_id))
    else:
        components.append(str(uid))
    return "/".join(components)
