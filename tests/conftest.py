"""
Pytest configuration
Fixtures: recording channels, a hand-driven scheduler and a fresh ChatContext
"""
import json

import pytest

from parley.context import ChatContext
from parley.router import dispatch
from parley.timers import TimerHandle


ADMIN_PASSWORD = "s3cret-admin"
MUTE_SECONDS = 300
APPEAL_LINK = "https://example.org/appeal"


class FakeChannel:
    """Records every frame sent to it (decoded) and whether it was closed."""

    def __init__(self):
        self.sent = []
        self.closed = False

    @property
    def is_open(self):
        return not self.closed

    def send(self, data):
        self.sent.append(json.loads(data))

    def close(self):
        self.closed = True

    def frames(self, msg_type=None):
        if msg_type is None:
            return list(self.sent)
        return [f for f in self.sent if f["type"] == msg_type]

    def last(self, msg_type=None):
        frames = self.frames(msg_type)
        return frames[-1] if frames else None

    def texts(self, msg_type="system"):
        return [f["text"] for f in self.frames(msg_type)]

    def clear(self):
        self.sent.clear()


class ManualScheduler:
    """Timers only fire when the test calls advance()."""

    def __init__(self):
        self.now = 0.0
        self.timers = []

    def schedule(self, delay, callback):
        handle = TimerHandle(delay, callback)
        self.timers.append((self.now + delay, handle))
        return handle

    def pending(self):
        return [h for _, h in self.timers if h.active]

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            due = [(at, h) for at, h in self.timers if at <= target and h.active]
            if not due:
                break
            at, handle = min(due, key=lambda item: item[0])
            self.timers.remove((at, handle))
            self.now = at
            handle.fire()
        self.now = target


class ChatHarness:
    """Drives a ChatContext the way the transport would."""

    def __init__(self, ctx, scheduler):
        self.ctx = ctx
        self.scheduler = scheduler

    def connect(self):
        return self.ctx.connect(FakeChannel())

    def send(self, session, **payload):
        return dispatch(self.ctx, session, json.dumps(payload))

    def send_raw(self, session, raw):
        return dispatch(self.ctx, session, raw)

    def join(self, name):
        session = self.connect()
        self.send(session, type="setName", name=name)
        return session

    def admin(self, name="moderator"):
        session = self.join(name)
        self.send(session, type="adminLogin", password=ADMIN_PASSWORD)
        return session

    def clear(self, *sessions):
        for s in sessions:
            s.channel.clear()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def ctx(scheduler):
    return ChatContext(
        scheduler,
        admin_password=ADMIN_PASSWORD,
        mute_duration=MUTE_SECONDS,
        appeal_link=APPEAL_LINK,
    )


@pytest.fixture
def chat(ctx, scheduler):
    return ChatHarness(ctx, scheduler)


@pytest.fixture
def make_chat(scheduler):
    """Harness over a ChatContext built with custom settings."""
    def _make(**settings):
        return ChatHarness(ChatContext(scheduler, **settings), scheduler)
    return _make
