"""邮件加载应用服务"""

import logging
from typing import Any, Mapping, Optional

from domain.mail.entities.message import Message, MessageEnvironment
from domain.mail.services.mail_resource import MailResource
from domain.mail.services.message_path import PathEncoder, build_absolute_path, to_path_segment
from domain.mail.value_objects.message_fields import UNASSIGNED_UID
from domain.mailbox.entities.mailbox import Mailbox


class MessageLoader:
    """
    邮件加载服务

    为邮箱创建 Message 实体，并在 UID 已知时登记到邮箱的 UID 索引：
    - 邮件列表已带有头部数据时同步创建
    - 只知道 UID 时发起异步获取，实体进入加载状态
    - 新建草稿时以草稿 ID 创建
    """

    def __init__(
        self,
        resource: MailResource,
        path_encoder: PathEncoder = to_path_segment,
        logger: Optional[logging.Logger] = None,
    ):
        """
        初始化邮件加载服务

        Args:
            resource: 远端邮件存储
            path_encoder: 邮箱路径组件转义函数
            logger: 可选的日志记录器，同时注入到创建的实体中
        """
        self._resource = resource
        self._path_encoder = path_encoder
        self._logger = logger or logging.getLogger(__name__)

    @property
    def environment(self) -> MessageEnvironment:
        """创建实体时注入的协作者"""
        return MessageEnvironment(
            resource=self._resource,
            logger=self._logger,
            path_encoder=self._path_encoder,
        )

    def from_headers(self, mailbox: Mailbox, data: Mapping[str, Any]) -> Message:
        """
        用已有的头部数据同步创建邮件

        Args:
            mailbox: 所在邮箱
            data: 邮件列表中的头部数据（至少包含 uid）

        Returns:
            已计算好标识的邮件实体
        """
        message = Message(mailbox.account_id, mailbox, data, self.environment)
        self._register(mailbox, message)
        return message

    def open(self, mailbox: Mailbox, uid: int) -> Message:
        """
        按 UID 异步加载邮件的展示表示

        必须在事件循环中调用。返回的实体处于加载状态，
        可以 await message.hydrated() 等待加载完成。

        Args:
            mailbox: 所在邮箱
            uid: 邮件 UID

        Returns:
            加载中的邮件实体
        """
        path = build_absolute_path(mailbox.account_id, mailbox.path, uid, encode=self._path_encoder)
        self._logger.debug(f"Opening message {path}")
        message = Message(
            mailbox.account_id,
            mailbox,
            self._resource.fetch(path, "view"),
            self.environment,
        )
        mailbox.uids_map.setdefault(uid, message)
        return message

    def new_draft(self, mailbox: Mailbox, draft_id: str) -> Message:
        """
        以草稿 ID 创建尚未保存的邮件

        Args:
            mailbox: 草稿所在邮箱
            draft_id: 服务器分配的临时草稿 ID

        Returns:
            UID 未分配的邮件实体
        """
        return Message(
            mailbox.account_id,
            mailbox,
            {"draftId": draft_id, "uid": UNASSIGNED_UID},
            self.environment,
        )

    def _register(self, mailbox: Mailbox, message: Message) -> None:
        if message.uid > UNASSIGNED_UID:
            mailbox.uids_map[message.uid] = message
