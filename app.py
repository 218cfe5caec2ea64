# ============================================
#     Parley: Main Application
# ============================================

# -------------------------------------------------
#   EVENTLET PATCH (REQUIRED FOR GUNICORN)
# -------------------------------------------------
import eventlet
eventlet.monkey_patch()

import os

# -----------------------------------------
#   ENV VARIABLES (.env / deployment secrets)
# -----------------------------------------
from dotenv import load_dotenv
load_dotenv()

from parley.config import ADMIN_PASSWORD
from parley.server import create_app
from parley.logger import log_info, log_warning, log_exception

# =========================================
#   FLASK + SOCKET.IO + CHAT CONTEXT
# =========================================
# Nothing to serve without an app, so a failure here is fatal
try:
    app, socketio = create_app()
    log_info("app", "Application created successfully.")
except Exception:
    log_exception("app", "Error creating application at startup")
    raise

if not ADMIN_PASSWORD:
    log_warning("app", "ADMIN_PASSWORD missing, admin login is disabled.")

# =========================================
#   RUN SERVER (DEV / PROD)
# =========================================
if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    log_info("app", f"Server starting on port {port}...")
    socketio.run(app, host="0.0.0.0", port=port)
