# ============================================
#   Parley: Socket.IO Handlers
#   connect / message / disconnect → ChatContext
# ============================================

from flask import request

from parley.router import dispatch
from parley.logger import log_info, log_exception


class SocketChannel:
    """
    Duplex channel of one Socket.IO client.

    Frames go out as plain "message" events carrying a JSON string.
    """

    def __init__(self, socketio, sid, namespace="/"):
        self.socketio = socketio
        self.sid = sid
        self.namespace = namespace
        self.closed = False

    @property
    def is_open(self) -> bool:
        return not self.closed

    def send(self, data):
        self.socketio.send(data, to=self.sid, namespace=self.namespace)

    def close(self):
        if self.closed:
            return
        self.closed = True
        # Triggers the disconnect handler for this sid
        self.socketio.server.disconnect(self.sid, namespace=self.namespace)


def register_handlers(socketio, ctx):
    """
    Wire Socket.IO events of the default namespace to `ctx`.
    """

    # sid → Session
    sessions_by_sid = {}

    # -----------------------------------------
    # CONNECT
    # -----------------------------------------
    @socketio.on("connect", namespace="/")
    def on_connect(auth=None):
        channel = SocketChannel(socketio, request.sid)
        session = ctx.connect(channel)
        sessions_by_sid[request.sid] = session
        log_info("sockets", f"Client connected: sid={request.sid} session={session.id}")

    # -----------------------------------------
    # INBOUND FRAMES
    # -----------------------------------------
    @socketio.on("message", namespace="/")
    def on_message(data=None):
        session = sessions_by_sid.get(request.sid)
        if session is None:
            return

        try:
            dispatch(ctx, session, data)
        except Exception:
            log_exception("sockets", f"Error processing frame from sid={request.sid}")

    # Clients using socket.send(obj) with json=True
    socketio.on_event("json", on_message, namespace="/")

    # -----------------------------------------
    # DISCONNECT
    # -----------------------------------------
    @socketio.on("disconnect", namespace="/")
    def on_disconnect(reason=None):
        session = sessions_by_sid.pop(request.sid, None)
        if session is None:
            return

        session.channel.closed = True
        ctx.drop(session)

        log_info("sockets", f"Client disconnected: sid={request.sid} session={session.id}")
