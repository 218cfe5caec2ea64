# ============================================
#     Parley: Application factory
#     Flask app + Socket.IO server + ChatContext
# ============================================

from flask import Flask, render_template
from flask_socketio import SocketIO

from parley.config import SOCKETIO_ASYNC_MODE, CORS_ALLOWED_ORIGINS
from parley.context import ChatContext
from parley.sockets import register_handlers
from parley.timers import SocketIOScheduler
from parley.logger import log_info, log_error


def create_app(ctx=None, async_mode=None):
    """
    Build (app, socketio).

    Without `ctx` a fresh ChatContext is created, scheduling mute
    expiry as Socket.IO background tasks.
    """
    app = Flask(__name__)
    socketio = SocketIO(
        app,
        cors_allowed_origins=CORS_ALLOWED_ORIGINS,
        async_mode=async_mode or SOCKETIO_ASYNC_MODE,
    )

    if ctx is None:
        ctx = ChatContext(SocketIOScheduler(socketio))

    app.extensions["parley"] = ctx

    # =========================================
    #   REGISTER SOCKET.IO HANDLERS
    # =========================================
    try:
        register_handlers(socketio, ctx)
        log_info("server", f"Socket handlers registered (async_mode={socketio.async_mode}).")
    except Exception as e:
        log_error("server", f"Error registering socket handlers: {e}")

    @app.route("/")
    def index():
        try:
            return render_template("index.html")
        except Exception as e:
            log_error("server", f"Error rendering index route: {e}")
            return "Internal server error", 500

    return app, socketio
