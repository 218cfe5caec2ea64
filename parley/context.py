# ============================================
#     Parley: Chat Context
#     Single owner of registry + moderation state,
#     handed explicitly to every handler
# ============================================

import threading

from parley import config
from parley.registry import ConnectionRegistry, Session
from parley.moderation import ModerationStore
from parley.protocol import system
from parley.broadcast import broadcast_all, broadcast_roster
from parley.logger import log_info, log_exception


class ChatContext:
    """
    Runtime state of one chat server.

    Settings default to parley.config and can be overridden per instance
    (tests pass their own scheduler, password and durations).

    `lock` guards the registry and the moderation store together; hold it
    for any change to either. It is re-entrant: a ban closes a channel and
    the transport calls drop() again from inside the same handler.
    """

    def __init__(
        self,
        scheduler,
        admin_password=None,
        mute_duration=None,
        appeal_link=None,
    ):
        self.scheduler = scheduler
        self.admin_password = config.ADMIN_PASSWORD if admin_password is None else admin_password
        self.mute_duration = config.MUTE_DURATION_SECONDS if mute_duration is None else mute_duration
        self.appeal_link = config.BAN_APPEAL_LINK if appeal_link is None else appeal_link

        self.lock = threading.RLock()

        self.registry = ConnectionRegistry()
        # Mute expiry goes through schedule() so it runs under the lock
        self.moderation = ModerationStore(self)

        # Mutes and warnings die with their session
        self.registry.on_remove(self.moderation.purge)

    # -----------------------------------------
    # TIMERS
    # -----------------------------------------
    def schedule(self, delay, callback):
        """
        Schedule `callback` on the injected scheduler, run under `lock`.
        """
        def _locked():
            with self.lock:
                callback()

        return self.scheduler.schedule(delay, _locked)

    # -----------------------------------------
    # SESSION LIFECYCLE
    # -----------------------------------------
    def connect(self, channel) -> Session:
        session = Session(channel)
        with self.lock:
            self.registry.add(session)
            live = len(self.registry)
        log_info("context", f"Session {session.id} connected ({live} live).")
        return session

    def drop(self, session, announce=True):
        """
        Destroy a session: unregister it, purge its moderation entries and
        close its channel. Safe to call more than once.

        With announce=True a logged-in session's departure is told to the
        remaining users along with a fresh roster.
        """
        with self.lock:
            if self.registry.remove(session.id) is None:
                return

            try:
                if session.channel is not None:
                    session.channel.close()
            except Exception:
                log_exception("context", f"Error closing channel of session={session.id}")

            if session.is_logged_in and announce:
                broadcast_all(self.registry, system(f"{session.display_name} has left the chat."))
                broadcast_roster(self.registry)

        log_info("context", f'Session {session.id} ("{session.display_name}") dropped.')
