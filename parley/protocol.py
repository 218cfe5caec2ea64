# ============================================
#     Parley: Wire protocol
#     Inbound variants (tagged by "type") + outbound envelopes
# ============================================

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional


# =====================================================
#   INBOUND VARIANTS
# =====================================================

@dataclass(frozen=True)
class SetName:
    name: str


@dataclass(frozen=True)
class ChatMessage:
    text: str


@dataclass(frozen=True)
class AdminLogin:
    password: str


class AdminCommand:
    """Marker base: only processed for sessions with is_admin."""


@dataclass(frozen=True)
class AdminBroadcast(AdminCommand):
    text: str


@dataclass(frozen=True)
class AdminWarn(AdminCommand):
    name: str


@dataclass(frozen=True)
class AdminMute(AdminCommand):
    name: str


@dataclass(frozen=True)
class AdminBan(AdminCommand):
    name: str


@dataclass(frozen=True)
class AdminUnban(AdminCommand):
    name: str


@dataclass(frozen=True)
class AdminAddWord(AdminCommand):
    word: str


@dataclass(frozen=True)
class AdminRemoveWord(AdminCommand):
    word: str


@dataclass(frozen=True)
class Unknown:
    type: str


# type tag → (variant class, required string field)
INBOUND_TYPES = {
    "setName": (SetName, "name"),
    "message": (ChatMessage, "text"),
    "adminLogin": (AdminLogin, "password"),
    "adminBroadcast": (AdminBroadcast, "text"),
    "adminWarn": (AdminWarn, "name"),
    "adminMute": (AdminMute, "name"),
    "adminBan": (AdminBan, "name"),
    "adminUnban": (AdminUnban, "name"),
    "adminAddWord": (AdminAddWord, "word"),
    "adminRemoveWord": (AdminRemoveWord, "word"),
}


def parse_inbound(raw) -> Optional[object]:
    """
    Turn one inbound frame into a variant instance.

    Accepts a JSON string/bytes or an already-decoded dict.
    Returns None for malformed frames (caller drops them silently)
    and Unknown for a well-formed frame with an unrecognized type.
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(raw, str):
        try:
            data = json.loads(raw)
        except ValueError:
            return None
    else:
        data = raw

    if not isinstance(data, dict):
        return None

    msg_type = data.get("type")
    if not isinstance(msg_type, str):
        return None

    entry = INBOUND_TYPES.get(msg_type)
    if entry is None:
        return Unknown(msg_type)

    cls, field = entry
    value = data.get(field)
    if not isinstance(value, str):
        return None

    return cls(value)


# =====================================================
#   OUTBOUND ENVELOPES
# =====================================================

def encode(payload: Dict[str, Any]) -> str:
    # Compact JSON, keep non-ASCII as UTF-8
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def join_success(text):
    return {"type": "joinSuccess", "text": text}


def join_error(text):
    return {"type": "joinError", "text": text}


def banned(link):
    return {"type": "banned", "link": link}


def system(text):
    return {"type": "system", "text": text}


def chat_message(name, text):
    return {"type": "message", "name": name, "text": text}


def admin_success():
    return {"type": "adminSuccess"}


def banned_word_list(words):
    return {"type": "bannedWordList", "words": list(words)}


def banned_user_list(users):
    return {"type": "bannedUserList", "users": list(users)}


def user_list(users):
    return {"type": "userList", "users": list(users)}
