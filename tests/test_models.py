"""Tests for models.py: typed response decoding and payload records."""

import pytest

from claudeai_cli.exceptions import UnexpectedResponseShape, ValidationError
from claudeai_cli.models import (
    Account,
    Attachment,
    BulkDeleteResult,
    ChatDetail,
    ChatMessage,
    ChatSummary,
)
from conftest import ACCOUNT_JSON, ORG


class TestAccount:
    def test_from_value(self):
        account = Account.from_value(ACCOUNT_JSON)
        assert account.uuid == "user-1"
        assert account.organization_uuid == ORG
        assert account.organization_name == "Personal"
        assert account.display_name == "Ada"

    def test_uses_first_membership(self):
        data = dict(
            ACCOUNT_JSON,
            memberships=[
                {"organization": {"uuid": "first"}},
                {"organization": {"uuid": "second"}},
            ],
        )
        assert Account.from_value(data).organization_uuid == "first"

    def test_optional_fields_missing(self):
        account = Account.from_value(
            {"uuid": "u", "memberships": [{"organization": {"uuid": "o"}}]}
        )
        assert account.email_address is None
        assert account.full_name is None

    def test_no_memberships(self):
        with pytest.raises(UnexpectedResponseShape) as exc_info:
            Account.from_value({"uuid": "u", "memberships": []})
        assert "memberships" in str(exc_info.value)

    def test_missing_org_uuid(self):
        with pytest.raises(UnexpectedResponseShape):
            Account.from_value({"uuid": "u", "memberships": [{"organization": {}}]})

    def test_organization_not_object(self):
        with pytest.raises(UnexpectedResponseShape):
            Account.from_value({"uuid": "u", "memberships": [{"organization": "o"}]})

    def test_not_an_object(self):
        with pytest.raises(UnexpectedResponseShape):
            Account.from_value(["u"])

    def test_wrong_type_for_optional(self):
        with pytest.raises(UnexpectedResponseShape):
            Account.from_value(dict(ACCOUNT_JSON, full_name=12))

    def test_to_dict(self):
        assert Account.from_value(ACCOUNT_JSON).to_dict()["organization_uuid"] == ORG


class TestChatSummary:
    def test_from_value(self):
        chat = ChatSummary.from_value({"uuid": "c", "name": "Hi", "created_at": "t"})
        assert chat == ChatSummary(uuid="c", name="Hi", created_at="t")

    def test_null_name_becomes_empty(self):
        assert ChatSummary.from_value({"uuid": "c", "name": None}).name == ""

    def test_missing_uuid(self):
        with pytest.raises(UnexpectedResponseShape) as exc_info:
            ChatSummary.from_value({"name": "x"})
        assert "'uuid'" in str(exc_info.value)


class TestChatDetail:
    def test_messages_decoded_in_order(self):
        chat = ChatDetail.from_value(
            {
                "uuid": "c",
                "name": "Chat",
                "chat_messages": [
                    {"uuid": "m1", "text": "Hi", "sender": "human", "index": 0},
                    {"uuid": "m2", "text": "Hello!", "sender": "assistant", "index": 1},
                ],
            }
        )
        assert [m.sender for m in chat.messages] == ["human", "assistant"]
        assert chat.messages[1] == ChatMessage(
            uuid="m2", text="Hello!", sender="assistant", index=1
        )

    def test_no_messages(self):
        assert ChatDetail.from_value({"uuid": "c"}).messages == []

    def test_messages_not_a_list(self):
        with pytest.raises(UnexpectedResponseShape):
            ChatDetail.from_value({"uuid": "c", "chat_messages": {}})

    def test_bad_message_index(self):
        with pytest.raises(UnexpectedResponseShape):
            ChatMessage.from_value({"text": "x", "index": "0"})

    def test_to_dict_nests_messages(self):
        chat = ChatDetail.from_value(
            {"uuid": "c", "chat_messages": [{"text": "Hi", "sender": "human"}]}
        )
        assert chat.to_dict()["messages"][0]["text"] == "Hi"


class TestAttachment:
    def test_from_file(self, tmp_path):
        path = tmp_path / "notes.md"
        path.write_text("# Notes\nhello\n", encoding="utf-8")
        att = Attachment.from_file(str(path))
        assert att.file_name == "notes.md"
        assert att.file_size == path.stat().st_size
        assert att.extracted_content == "# Notes\nhello\n"
        assert att.file_type

    def test_unknown_extension_defaults_to_text(self, tmp_path):
        path = tmp_path / "data.zzqq"
        path.write_text("x", encoding="utf-8")
        assert Attachment.from_file(str(path)).file_type == "text/plain"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValidationError) as exc_info:
            Attachment.from_file(str(tmp_path / "nope.txt"))
        assert "not found" in str(exc_info.value)

    def test_binary_file(self, tmp_path):
        path = tmp_path / "blob.txt"
        path.write_bytes(b"\xff\xfe\x00\x81")
        with pytest.raises(ValidationError):
            Attachment.from_file(str(path))

    def test_directory(self, tmp_path):
        with pytest.raises(ValidationError) as exc_info:
            Attachment.from_file(str(tmp_path))
        assert "Cannot read attachment" in str(exc_info.value)

    def test_payload_keys(self):
        att = Attachment("a.txt", 1, "text/plain", "x")
        assert set(att.to_payload()) == {
            "file_name",
            "file_size",
            "file_type",
            "extracted_content",
        }


class TestBulkDeleteResult:
    def test_ok_when_nothing_failed(self):
        result = BulkDeleteResult(deleted=["a", "b"], failed=[])
        assert result.ok is True
        assert result.to_dict()["deleted_count"] == 2

    def test_partial_failure(self):
        result = BulkDeleteResult(deleted=["a"], failed=[{"uuid": "b", "error": "HTTP 500"}])
        assert result.ok is False
        data = result.to_dict()
        assert data["ok"] is False
        assert data["failed_count"] == 1
