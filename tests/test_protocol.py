"""
Tests for the wire protocol (parley/protocol.py)
"""
import json

import pytest

from parley import protocol
from parley.protocol import (
    parse_inbound,
    AdminBan,
    AdminCommand,
    AdminLogin,
    ChatMessage,
    SetName,
    Unknown,
)


class TestParseInbound:

    def test_known_types(self):
        assert parse_inbound('{"type":"setName","name":"alice"}') == SetName("alice")
        assert parse_inbound('{"type":"message","text":"hi"}') == ChatMessage("hi")
        assert parse_inbound('{"type":"adminLogin","password":"pw"}') == AdminLogin("pw")
        assert parse_inbound('{"type":"adminBan","name":"bob"}') == AdminBan("bob")

    def test_every_admin_type_is_an_admin_command(self):
        for tag, (cls, field) in protocol.INBOUND_TYPES.items():
            msg = parse_inbound(json.dumps({"type": tag, field: "x"}))
            privileged = tag.startswith("admin") and tag != "adminLogin"
            assert isinstance(msg, cls)
            assert isinstance(msg, AdminCommand) is privileged

    def test_accepts_decoded_dict_and_bytes(self):
        assert parse_inbound({"type": "message", "text": "hi"}) == ChatMessage("hi")
        assert parse_inbound(b'{"type":"message","text":"h\xc3\xa9"}') == ChatMessage("hé")

    def test_unknown_type(self):
        assert parse_inbound('{"type":"typing"}') == Unknown("typing")

    @pytest.mark.parametrize("raw", [
        "not json",
        "[1, 2, 3]",
        '"just a string"',
        "{}",
        '{"type": 5}',
        '{"type":"setName"}',
        '{"type":"setName","name":42}',
        '{"type":"message","text":null}',
        b"\xff\xfe",
        None,
    ])
    def test_malformed_frames(self, raw):
        assert parse_inbound(raw) is None

    def test_extra_fields_ignored(self):
        assert parse_inbound('{"type":"message","text":"hi","extra":1}') == ChatMessage("hi")


class TestOutbound:

    def test_encode_is_compact_utf8(self):
        assert protocol.encode(protocol.system("héllo")) == '{"type":"system","text":"héllo"}'

    def test_envelope_shapes(self):
        assert protocol.join_success("ok") == {"type": "joinSuccess", "text": "ok"}
        assert protocol.join_error("no") == {"type": "joinError", "text": "no"}
        assert protocol.banned("/appeal") == {"type": "banned", "link": "/appeal"}
        assert protocol.chat_message("alice", "hi") == {"type": "message", "name": "alice", "text": "hi"}
        assert protocol.admin_success() == {"type": "adminSuccess"}
        assert protocol.banned_word_list({"spam"}) == {"type": "bannedWordList", "words": ["spam"]}
        assert protocol.banned_user_list(["bob"]) == {"type": "bannedUserList", "users": ["bob"]}
        assert protocol.user_list(("a", "b")) == {"type": "userList", "users": ["a", "b"]}
