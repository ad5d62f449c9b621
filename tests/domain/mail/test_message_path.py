"""邮件路径构造单元测试"""

import pytest

from domain.mail.services.message_path import (
    build_absolute_path,
    from_path_segment,
    split_mailbox_path,
    to_path_segment,
)


class TestToPathSegment:
    """to_path_segment 转义测试"""

    def test_plain_component_unchanged(self):
        """测试普通组件保持不变"""
        assert to_path_segment("INBOX") == "INBOX"

    @pytest.mark.parametrize(
        "component, expected",
        [
            ("Sent Items", "Sent_SP_Items"),
            ("a.b", "a_D_b"),
            ("my_box", "my_U_box"),
            ("R&D", "R_AM_D"),
            ("c++", "c_P__P_"),
            ("x,y", "x_CO_y"),
        ],
    )
    def test_special_characters_escaped(self, component, expected):
        """测试特殊字符被转义"""
        assert to_path_segment(component) == expected

    def test_leading_digit_prefixed(self):
        """测试以数字开头的组件加下划线前缀"""
        assert to_path_segment("2024") == "_2024"

    def test_underscore_escaped_before_others(self):
        """测试下划线先于其他字符转义，避免冲突"""
        assert to_path_segment("a_D_b") != to_path_segment("a.b")

    @pytest.mark.parametrize(
        "component",
        ["INBOX", "Sent Items", "a_D_b", "a.b", "_5", "2024", "it's R&D + more, ok:*#@"],
    )
    def test_reversible(self, component):
        """测试转义可逆"""
        assert from_path_segment(to_path_segment(component)) == component


class TestSplitMailboxPath:
    """split_mailbox_path 测试"""

    def test_split_string(self):
        """测试拆分 "/" 分隔的字符串"""
        assert split_mailbox_path("INBOX/Archive") == ["INBOX", "Archive"]

    def test_sequence_copied(self):
        """测试序列被复制为列表"""
        path = ("INBOX", "Archive")
        assert split_mailbox_path(path) == ["INBOX", "Archive"]


class TestBuildAbsolutePath:
    """build_absolute_path 测试"""

    def test_path_ends_with_uid(self):
        """测试默认以 UID 结尾"""
        path = build_absolute_path("acct1", ["INBOX"], 7)

        assert path == "acct1/folderINBOX/7"

    def test_nested_mailbox(self):
        """测试多级邮箱路径"""
        path = build_absolute_path("acct1", ["INBOX", "Sent Items"], 12)

        assert path == "acct1/folderINBOX/folderSent_SP_Items/12"

    def test_as_draft_with_draft_id(self):
        """测试草稿身份使用草稿 ID"""
        path = build_absolute_path("acct1", ["Drafts"], 3, draft_id="tmp1", as_draft=True)

        assert path == "acct1/folderDrafts/tmp1"

    def test_as_draft_without_draft_id_falls_back_to_uid(self):
        """测试没有草稿 ID 时回退到 UID"""
        path = build_absolute_path("acct1", ["Drafts"], 3, draft_id=None, as_draft=True)

        assert path.endswith("/3")

    def test_draft_id_ignored_without_as_draft(self):
        """测试未请求草稿身份时忽略草稿 ID"""
        path = build_absolute_path("acct1", ["Drafts"], 3, draft_id="tmp1")

        assert path.endswith("/3")
        assert "tmp1" not in path

    def test_custom_encoder(self):
        """测试可注入路径转义函数"""
        path = build_absolute_path("acct1", ["INBOX"], 1, encode=str.lower)

        assert path == "acct1/folderinbox/1"

    def test_string_mailbox_path(self):
        """测试字符串形式的邮箱路径"""
        path = build_absolute_path("acct1", "INBOX/Archive", 5)

        assert path == "acct1/folderINBOX/folderArchive/5"
