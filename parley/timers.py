# ============================================
#     Parley: Timer scheduling
#     One-shot callbacks on the Socket.IO event loop
# ============================================

from parley.logger import log_exception


class TimerHandle:
    """
    Returned by a scheduler. cancel() is idempotent; a cancelled timer
    never runs its callback.
    """

    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)

    def fire(self):
        if not self.active:
            return
        self.fired = True
        try:
            self.callback()
        except Exception:
            log_exception("timers", "Error in scheduled callback")


class SocketIOScheduler:
    """
    Schedules callbacks as Socket.IO background tasks.

    With eventlet each task is a green thread, so the callback runs
    between two inbound events and never interleaves with a handler.
    """

    def __init__(self, socketio):
        self.socketio = socketio

    def schedule(self, delay, callback) -> TimerHandle:
        handle = TimerHandle(delay, callback)

        def _task():
            self.socketio.sleep(delay)
            handle.fire()

        self.socketio.start_background_task(_task)
        return handle
