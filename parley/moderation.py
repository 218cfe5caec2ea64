# ============================================
#     Parley: Moderation Store
#     Banned names / banned words / mutes / warnings
#     Process lifetime only (nothing is persisted)
# ============================================

from typing import Callable, Dict, List

from parley.timers import TimerHandle
from parley.logger import log_info


def normalize(value: str) -> str:
    return (value or "").strip().lower()


class ModerationStore:
    """
    All moderation state of the process.

    `scheduler` must provide schedule(delay_seconds, callback) returning a
    handle with cancel(). Mute expiry runs through it, so tests can drive
    time by hand.
    """

    def __init__(self, scheduler):
        self.scheduler = scheduler
        self.banned_names = set()
        self.banned_words = set()
        self.mutes: Dict[str, TimerHandle] = {}
        self.warnings: Dict[str, int] = {}

    # -----------------------------------------
    # MUTES
    # -----------------------------------------
    def is_muted(self, session_id: str) -> bool:
        return session_id in self.mutes

    def mute(self, session_id: str, duration: float, on_expire: Callable[[], None] = None) -> bool:
        """
        Mute a session for `duration` seconds.
        Returns False (and changes nothing) if it is already muted.
        """
        if session_id in self.mutes:
            return False

        def _expire():
            # A purge may have replaced or dropped the entry meanwhile
            if self.mutes.get(session_id) is not handle:
                return
            self.mutes.pop(session_id, None)
            log_info("moderation", f"Mute expired for session={session_id}")
            if on_expire:
                on_expire()

        handle = self.scheduler.schedule(duration, _expire)
        self.mutes[session_id] = handle
        log_info("moderation", f"Muted session={session_id} for {duration}s")
        return True

    # -----------------------------------------
    # WARNINGS
    # -----------------------------------------
    def warn(self, session_id: str) -> int:
        total = self.warnings.get(session_id, 0) + 1
        self.warnings[session_id] = total
        return total

    def warning_count(self, session_id: str) -> int:
        return self.warnings.get(session_id, 0)

    # -----------------------------------------
    # BANNED NAMES
    # -----------------------------------------
    def is_name_banned(self, name: str) -> bool:
        return normalize(name) in self.banned_names

    def ban_name(self, name: str) -> bool:
        key = normalize(name)
        if not key or key in self.banned_names:
            return False
        self.banned_names.add(key)
        return True

    def unban_name(self, name: str) -> bool:
        key = normalize(name)
        if key not in self.banned_names:
            return False
        self.banned_names.discard(key)
        return True

    def banned_name_list(self) -> List[str]:
        return sorted(self.banned_names)

    # -----------------------------------------
    # BANNED WORDS
    # -----------------------------------------
    def add_word(self, word: str) -> bool:
        key = normalize(word)
        if not key or key in self.banned_words:
            return False
        self.banned_words.add(key)
        return True

    def remove_word(self, word: str) -> bool:
        key = normalize(word)
        if key not in self.banned_words:
            return False
        self.banned_words.discard(key)
        return True

    def banned_word_list(self) -> List[str]:
        return sorted(self.banned_words)

    def contains_banned_word(self, text: str) -> bool:
        """Substring match against the whole lowercased body."""
        body = (text or "").lower()
        return any(word in body for word in self.banned_words)

    # -----------------------------------------
    # SESSION CLEANUP
    # -----------------------------------------
    def purge(self, session_id: str):
        handle = self.mutes.pop(session_id, None)
        if handle is not None:
            handle.cancel()
        self.warnings.pop(session_id, None)
