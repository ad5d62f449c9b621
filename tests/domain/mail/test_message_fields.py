"""持久化字段与 merge_remote 单元测试"""

from domain.mail.value_objects.email_address import EmailAddress
from domain.mail.value_objects.message_fields import UNASSIGNED_UID, PersistedFields, merge_remote


class TestMergeRemote:
    """merge_remote 测试"""

    def test_known_fields_merged(self):
        """测试白名单字段按属性名合并"""
        fields = merge_remote(
            PersistedFields(),
            {"uid": "12", "draftId": "tmp1", "subject": "Hi", "attachmentAttrs": [{"filename": "a.pdf"}]},
        )

        assert fields.uid == 12
        assert fields.draft_id == "tmp1"
        assert fields.subject == "Hi"
        assert fields.attachment_attrs == [{"filename": "a.pdf"}]

    def test_null_uid_maps_to_unassigned(self):
        """测试空 UID 合并为未分配哨兵值"""
        fields = merge_remote(PersistedFields(uid=4), {"uid": None})

        assert fields.uid == UNASSIGNED_UID

    def test_unknown_fields_ignored(self):
        """测试未知字段不会进入实体"""
        fields = merge_remote(PersistedFields(), {"$futureMessageData": object(), "bogus": 1})

        assert fields == PersistedFields()

    def test_absent_fields_untouched(self):
        """测试未出现的字段保持原值"""
        fields = PersistedFields(uid=4, subject="Old")

        merge_remote(fields, {"content": "<p>x</p>"})

        assert fields.uid == 4
        assert fields.subject == "Old"
        assert fields.content == "<p>x</p>"

    def test_address_fields_converted(self):
        """测试地址字段转换为 EmailAddress 记录"""
        fields = merge_remote(
            PersistedFields(),
            {"reply-to": [{"email": "r@x.org", "name": "R"}], "cc": "a@x.org, b@x.org"},
        )

        assert fields.addresses["reply-to"] == [EmailAddress(email="r@x.org", name="R")]
        assert [a.email for a in fields.addresses["cc"]] == ["a@x.org", "b@x.org"]

    def test_empty_patch(self):
        """测试空数据不做修改"""
        fields = PersistedFields()

        assert merge_remote(fields, None) is fields
        assert fields.uid == UNASSIGNED_UID


class TestPersistedFieldsToWire:
    """to_wire 测试"""

    def test_wire_names(self):
        """测试输出服务器字段名并省略空值"""
        fields = PersistedFields(uid=3, draft_id=None, subject="Hi")

        wire = fields.to_wire()

        assert wire["uid"] == 3
        assert wire["subject"] == "Hi"
        assert "draftId" not in wire
        assert "draft_id" not in wire


class TestEmailAddress:
    """EmailAddress 测试"""

    def test_round_trip_dict(self):
        """测试与字典互相转换"""
        data = {"email": "a@x.org", "name": "A", "text": "A <a@x.org>"}

        assert EmailAddress.from_dict(data).to_dict() == data

    def test_has_distinct_name(self):
        """测试名称与地址相同时不算显示名称"""
        assert EmailAddress(email="a@x.org", name="A").has_distinct_name is True
        assert EmailAddress(email="a@x.org", name="a@x.org").has_distinct_name is False
        assert EmailAddress(email="a@x.org").has_distinct_name is False
