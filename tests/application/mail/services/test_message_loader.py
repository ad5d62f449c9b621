"""MessageLoader 单元测试"""

import pytest
from unittest.mock import AsyncMock, Mock

from application.mail.services.message_loader import MessageLoader
from domain.mail.entities.message import HydrationState
from domain.mail.exceptions import TransportFailure
from domain.mail.value_objects.message_fields import UNASSIGNED_UID
from domain.mailbox.entities.mailbox import Mailbox


@pytest.fixture
def mock_resource():
    """创建模拟远端邮件存储"""
    resource = Mock()
    resource.fetch = AsyncMock()
    resource.save = AsyncMock()
    resource.post = AsyncMock()
    return resource


@pytest.fixture
def loader(mock_resource):
    return MessageLoader(resource=mock_resource)


@pytest.fixture
def inbox():
    return Mailbox.create(account_id="0", path=["INBOX"])


class TestMessageLoaderInit:
    """初始化测试"""

    def test_init_with_custom_logger(self, mock_resource):
        """测试自定义日志记录器会注入到实体环境"""
        mock_logger = Mock()
        loader = MessageLoader(resource=mock_resource, logger=mock_logger)

        assert loader.environment.logger is mock_logger
        assert loader.environment.resource is mock_resource


class TestMessageLoaderFromHeaders:
    """from_headers 测试"""

    def test_from_headers_registers_uid(self, loader, inbox):
        """测试同步创建并登记到 UID 索引"""
        message = loader.from_headers(inbox, {"uid": 4, "subject": "Hi"})

        assert message.id == "0/folderINBOX/4"
        assert message.state == HydrationState.SYNCHRONOUS
        assert inbox.uids_map[4] is message

    def test_from_headers_without_uid_not_registered(self, loader, inbox):
        """测试没有 UID 的数据不登记"""
        loader.from_headers(inbox, {"subject": "Hi"})

        assert inbox.uids_map == {}

    def test_from_headers_with_null_uid_not_registered(self, loader, inbox):
        """测试服务器返回空 UID 时按未分配处理"""
        message = loader.from_headers(inbox, {"uid": None, "draftId": "tmp1"})

        assert message.uid == UNASSIGNED_UID
        assert message.absolute_path(as_draft=True) == "0/folderINBOX/tmp1"
        assert inbox.uids_map == {}


class TestMessageLoaderOpen:
    """open 测试"""

    @pytest.mark.asyncio
    async def test_open_fetches_view(self, loader, inbox, mock_resource):
        """测试按 UID 发起 view 获取"""
        mock_resource.fetch.return_value = {"uid": 4, "content": "<p>Body</p>"}

        message = loader.open(inbox, 4)
        assert message.state == HydrationState.PENDING
        assert inbox.uids_map[4] is message

        await message.hydrated()

        mock_resource.fetch.assert_awaited_once_with("0/folderINBOX/4", "view")
        assert message.content == "<p>Body</p>"
        assert message.id == "0/folderINBOX/4"

    @pytest.mark.asyncio
    async def test_open_failure(self, loader, inbox, mock_resource):
        """测试获取失败时实体进入错误状态"""
        mock_resource.fetch.side_effect = TransportFailure({"error": "gone"})

        message = loader.open(inbox, 4)

        with pytest.raises(TransportFailure):
            await message.hydrated()
        assert message.is_error is True
        assert message.state == HydrationState.ERRORED


class TestMessageLoaderNewDraft:
    """new_draft 测试"""

    def test_new_draft(self, loader):
        """测试以草稿 ID 创建未分配 UID 的邮件"""
        drafts = Mailbox.create(account_id="0", path=["Drafts"])

        message = loader.new_draft(drafts, "tmp1")

        assert message.uid == UNASSIGNED_UID
        assert message.draft_id == "tmp1"
        assert message.absolute_path(as_draft=True) == "0/folderDrafts/tmp1"
        assert drafts.uids_map == {}
