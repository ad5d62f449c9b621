"""邮件实体"""

import asyncio
import inspect
import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Union

from markupsafe import Markup

from domain.common.base_event import DomainEvent
from domain.common.exceptions import InvalidOperationException, InvalidStateTransitionException
from domain.mail.events.mail_events import (
    MessageHydrated,
    MessageHydrationFailed,
    MessageRenumbered,
    MessageSent,
)
from domain.mail.exceptions import SendRejected, TransportFailure
from domain.mail.services.address_formatter import (
    ADDRESS_FIELDS,
    flatten_recipients,
    flattened_copy,
    format_full_addresses,
    join_address_list,
    short_address,
)
from domain.mail.services.mail_resource import MailResource
from domain.mail.services.message_path import PathEncoder, build_absolute_path, to_path_segment
from domain.mail.value_objects.email_address import EmailAddress
from domain.mail.value_objects.message_fields import UNASSIGNED_UID, PersistedFields, merge_remote
from domain.mailbox.entities.mailbox import Mailbox

MessageObserver = Callable[[DomainEvent], None]


class HydrationState(str, Enum):
    """邮件数据加载状态"""

    SYNCHRONOUS = "synchronous"
    """构造时已提供数据"""

    PENDING = "pending"
    """等待异步获取结果"""

    HYDRATED = "hydrated"
    """异步获取成功，数据已合并"""

    ERRORED = "errored"
    """加载失败"""


# 允许的加载状态转换
_TRANSITIONS: Dict[HydrationState, tuple] = {
    HydrationState.SYNCHRONOUS: (HydrationState.PENDING,),
    HydrationState.PENDING: (HydrationState.HYDRATED, HydrationState.ERRORED),
    HydrationState.HYDRATED: (HydrationState.PENDING,),
    HydrationState.ERRORED: (HydrationState.PENDING,),
}


@dataclass
class MessageEnvironment:
    """
    邮件实体的外部协作者

    通过构造函数显式注入，不使用进程级单例。

    Attributes:
        resource: 远端邮件存储
        logger: 日志记录器
        path_encoder: 邮箱路径组件转义函数
    """

    resource: MailResource
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))
    path_encoder: PathEncoder = to_path_segment


class Message:
    """
    邮件实体

    表示与远端邮箱存储同步的一封邮件。负责：
    - 根据所在邮箱和 UID（或草稿 ID）构造层级标识
    - 从已有数据或待完成的异步请求加载自身
    - 草稿保存后从临时标识切换到持久 UID
    - 地址字段在展示形式与传输形式之间的转换
    - 读取/编辑/保存/发送流程，并通知订阅者加载和错误状态

    Attributes:
        account_id: 邮件账号 ID
        fields: 持久化字段
        editable: 编辑快照（调用 editable_content 后才有值）
        is_error: 加载是否失败
        error: 加载失败时服务器返回的错误
    """

    def __init__(
        self,
        account_id: str,
        mailbox: Mailbox,
        message_data: Union[Mapping[str, Any], Awaitable[Mapping[str, Any]]],
        environment: MessageEnvironment,
    ):
        """
        初始化邮件

        Args:
            account_id: 邮件账号 ID
            mailbox: 所在邮箱（不持有）
            message_data: 已有数据，或将返回数据的 awaitable
            environment: 外部协作者
        """
        self.account_id = account_id
        self.fields = PersistedFields()
        self.editable: Optional[Dict[str, Any]] = None
        self.is_error = False
        self.error: Optional[Any] = None

        self._mailbox = mailbox
        self._env = environment
        self._id: Optional[str] = None
        self._observers: List[MessageObserver] = []
        self._pending: Optional[Awaitable[Mapping[str, Any]]] = None
        self._hydration: Optional[asyncio.Task] = None

        if inspect.isawaitable(message_data):
            self.state = HydrationState.PENDING
            self._pending = message_data
            self._hydration = asyncio.get_running_loop().create_task(self._settle(message_data))
            self._hydration.add_done_callback(_retrieve_exception)
        else:
            merge_remote(self.fields, message_data)
            self._id = self.absolute_path()
            self.format_full_addresses()
            self.state = HydrationState.SYNCHRONOUS

    def __repr__(self) -> str:
        return f"Message(id={self._id!r}, state={self.state.value})"

    # ============ 标识 ============

    @property
    def id(self) -> str:
        """
        邮件绝对路径

        Raises:
            InvalidOperationException: 数据尚未加载完成
        """
        if self._id is None:
            raise InvalidOperationException(
                operation="read_id",
                reason="Message identity is not available before hydration completes"
            )
        return self._id

    @property
    def mailbox(self) -> Mailbox:
        return self._mailbox

    @property
    def uid(self) -> int:
        return self.fields.uid

    @property
    def draft_id(self) -> Optional[str]:
        return self.fields.draft_id

    @property
    def subject(self) -> str:
        return self.fields.subject

    @property
    def content(self) -> str:
        return self.fields.content

    @property
    def is_pending(self) -> bool:
        """是否有未完成的加载请求"""
        return self._pending is not None

    def addresses(self, field_name: str) -> List[EmailAddress]:
        """返回指定地址字段的记录列表，字段不存在时返回空列表"""
        return self.fields.addresses.get(field_name, [])

    def absolute_path(self, as_draft: bool = False) -> str:
        """
        构造邮件路径

        Args:
            as_draft: 使用草稿 ID 代替 UID；未设置草稿 ID 时回退到 UID

        Returns:
            accountId/folder.../uid 形式的路径
        """
        return build_absolute_path(
            self.account_id,
            self._mailbox.path,
            self.fields.uid,
            draft_id=self.fields.draft_id,
            as_draft=as_draft,
            encode=self._env.path_encoder,
        )

    def set_uid(self, uid: int) -> None:
        """
        修改邮件 UID

        草稿保存后服务器分配持久 UID 时调用。如果原先已有 UID，
        邮箱索引中的槽位随之移动，旧键被清空。

        Args:
            uid: 新 UID
        """
        old_uid = self.fields.uid if self.fields.uid else UNASSIGNED_UID
        if old_uid == uid:
            return

        self.fields.uid = uid
        self._id = self.absolute_path()
        if old_uid > UNASSIGNED_UID:
            self._mailbox.move_slot(old_uid, uid)

        self._env.logger.debug(f"Message renumbered: {old_uid} -> {uid} ({self._id})")
        self._notify(MessageRenumbered(aggregate_id=self._id, old_uid=old_uid, new_uid=uid))

    # ============ 地址 ============

    def format_full_addresses(self) -> None:
        """为所有地址记录生成 "name <email>" 形式的 full"""
        format_full_addresses(self.fields.addresses)

    def short_address(self, field_name: str) -> str:
        """指定地址字段第一条记录的名称或地址"""
        return short_address(self.fields.addresses.get(field_name))

    def content_html(self) -> Markup:
        """正文已由服务器清理，直接标记为可信 HTML"""
        return Markup(self.fields.content or "")

    def omit(self) -> Dict[str, Any]:
        """
        生成提交服务器用的普通字典

        只包含持久化字段，地址字段转换为逗号连接、去除空白的字符串。
        """
        message: Dict[str, Any] = {"accountId": self.account_id}
        message.update(self.fields.to_wire())
        for field_name in ADDRESS_FIELDS:
            records = self.fields.addresses.get(field_name)
            if records:
                message[field_name] = join_address_list(records)
        return message

    # ============ 订阅 ============

    def subscribe(self, observer: MessageObserver) -> None:
        """注册订阅者，在加载完成、失败、重新编号、发送成功后收到事件"""
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: MessageObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self, event: DomainEvent) -> None:
        for observer in list(self._observers):
            try:
                observer(event)
            except Exception as e:
                self._env.logger.error(f"Observer failed handling {event.event_name}: {e}")

    # ============ 加载 ============

    async def hydrated(self) -> "Message":
        """
        等待构造时的异步加载完成

        Raises:
            TransportFailure: 加载失败
        """
        if self._hydration is None:
            return self
        return await self._hydration

    async def unwrap(self, future_data: Awaitable[Mapping[str, Any]]) -> "Message":
        """
        等待异步数据并合并到实体

        合并、重新计算标识、格式化地址和通知订阅者在同一段同步代码中完成，
        订阅者不会看到部分合并的实体。

        Args:
            future_data: 将返回邮件数据的 awaitable

        Returns:
            实体本身

        Raises:
            InvalidStateTransitionException: 已有未完成的加载
            TransportFailure: 请求失败，失败数据已合并且 is_error 已设置
        """
        try:
            self._transition(HydrationState.PENDING)
        except InvalidStateTransitionException:
            if inspect.iscoroutine(future_data):
                future_data.close()
            raise
        return await self._settle(future_data)

    async def _settle(self, future_data: Awaitable[Mapping[str, Any]]) -> "Message":
        self._pending = future_data
        try:
            data = await future_data
            merge_remote(self.fields, data)
            self._id = self.absolute_path()
            self.format_full_addresses()
        except asyncio.CancelledError:
            self._transition(HydrationState.ERRORED)
            self.is_error = True
            self.error = "cancelled"
            raise
        except Exception as e:
            self._transition(HydrationState.ERRORED)
            self._record_failure("load", e)
            raise
        finally:
            self._pending = None

        self.is_error = False
        self.error = None
        self._transition(HydrationState.HYDRATED)
        self._notify(MessageHydrated(aggregate_id=self._id, uid=self.fields.uid))
        return self

    def _transition(self, to_state: HydrationState) -> None:
        if to_state not in _TRANSITIONS[self.state]:
            raise InvalidStateTransitionException(
                entity="Message",
                from_state=self.state.value,
                to_state=to_state.value,
                reason="A hydration is already in progress" if self.state == HydrationState.PENDING
                else "Only a pending hydration can settle",
            )
        self.state = to_state

    def _record_failure(self, operation: str, failure: Exception) -> None:
        """
        记录远端请求失败

        合并服务器返回的错误数据，设置 is_error 和 error，
        记录错误日志并通知订阅者。调用方负责重新抛出。
        """
        payload = failure.payload if isinstance(failure, TransportFailure) else {}
        merge_remote(self.fields, payload)
        self.is_error = True
        self.error = payload.get("error", str(failure))
        self._env.logger.error(f"Message {operation} failed for {self._id or self.account_id}: {self.error}")
        self._notify(MessageHydrationFailed(aggregate_id=self._id, error=self.error, operation=operation))

    async def update(self) -> "Message":
        """
        重新获取邮件的展示表示（正文、附件列表等）

        Returns:
            实体本身
        """
        return await self.unwrap(self._env.resource.fetch(self.id, "view"))

    async def editable_content(self) -> str:
        """
        获取可编辑正文

        先获取当前邮件的编辑表示（得到草稿 ID），
        再以草稿身份获取编辑快照。两步都成功后才设置 editable。

        Returns:
            可编辑的正文文本

        Raises:
            TransportFailure: 任一步请求失败，失败数据已合并且 is_error 已设置
        """
        try:
            data = await self._env.resource.fetch(self.id, "edit")
            merge_remote(self.fields, data)
            self._id = self.absolute_path()
            self.format_full_addresses()

            editable = await self._env.resource.fetch(self.absolute_path(as_draft=True), "edit")
        except TransportFailure as failure:
            self._record_failure("edit", failure)
            raise
        self._env.logger.debug(f"editable = {json.dumps(editable, indent=2, default=str)}")
        self.editable = dict(editable)
        return self.editable.get("text", "")

    # ============ 保存与发送 ============

    def _require_editable(self, operation: str) -> Dict[str, Any]:
        if self.editable is None:
            raise InvalidOperationException(
                operation=operation,
                reason="Editable content has not been loaded"
            )
        return self.editable

    async def save(self) -> Dict[str, Any]:
        """
        保存草稿

        收件人字段扁平化后提交到草稿路径；服务器返回的 UID 触发重新编号，
        之后重新获取展示表示。两步都完成后返回。

        Returns:
            保存请求的响应

        Raises:
            TransportFailure: 保存或刷新失败，失败数据已合并且 is_error 已设置
        """
        data = flatten_recipients(self._require_editable("save"))
        self._env.logger.debug(f"save = {json.dumps(data, indent=2, default=str)}")

        try:
            response = await self._env.resource.save(self.absolute_path(as_draft=True), data)
        except TransportFailure as failure:
            self._record_failure("save", failure)
            raise
        self._env.logger.debug(f"save response = {json.dumps(response, indent=2, default=str)}")

        uid = response.get("uid")
        if uid is not None:
            self.set_uid(int(uid))
        else:
            self._env.logger.warning(f"Save response for {self._id} carries no uid")

        await self.update()
        return response

    async def send(self) -> Dict[str, Any]:
        """
        发送邮件

        在编辑快照的副本上扁平化收件人，不修改 editable，
        发送期间邮件仍可继续编辑。

        Returns:
            服务器响应（status 为 "success"）

        Raises:
            SendRejected: 响应 status 不是 "success"
            TransportFailure: 请求失败，失败数据已合并且 is_error 已设置
        """
        data = flattened_copy(self._require_editable("send"))
        self._env.logger.debug(f"send = {json.dumps(data, indent=2, default=str)}")

        draft_path = self.absolute_path(as_draft=True)
        try:
            response = await self._env.resource.post(draft_path, "send", data)
        except TransportFailure as failure:
            self._record_failure("send", failure)
            raise

        if response.get("status") == "success":
            self._env.logger.info(f"Message sent: {draft_path}")
            self._notify(MessageSent(aggregate_id=draft_path, response=dict(response)))
            return response

        self._env.logger.warning(f"Message send rejected: {draft_path} (status={response.get('status')!r})")
        raise SendRejected(response)


def _retrieve_exception(task: "asyncio.Task") -> None:
    # 失败已记录在实体上并由 hydrated() 抛出，这里避免未取回异常的警告
    if not task.cancelled():
        task.exception()
