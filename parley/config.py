# ============================================
#     Parley: Global Configuration
# ============================================

import os

# =========================================
#   ENVIRONMENT
# =========================================
# Expected values: "dev", "prod"
ENV = os.getenv("ENV", "dev").lower()

IS_PROD = ENV == "prod"

# =========================================
#   PATHS
# =========================================
# Nothing is persisted except logs. In prod they go to /var/data,
# in dev to ./var/data inside the repo.
#
# Override options:
#   - PARLEY_PERSIST_ROOT=/custom/path
#   - PARLEY_LOG_FILE=/custom/file.log

# Project root = one level above /parley
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

PERSIST_ROOT = (
    os.getenv("PARLEY_PERSIST_ROOT")
    or ("/var/data" if IS_PROD else os.path.join(PROJECT_ROOT, "var", "data"))
)

LOG_DIR = os.path.join(PERSIST_ROOT, "logs")
DEFAULT_LOG_FILE = os.path.join(LOG_DIR, "parley.log")
LOG_FILE = os.getenv("PARLEY_LOG_FILE", DEFAULT_LOG_FILE)

os.makedirs(os.path.dirname(LOG_FILE) or LOG_DIR, exist_ok=True)

# =========================================
#   IDENTITY
# =========================================
NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 20
DEFAULT_DISPLAY_NAME = "Anonymous"

# Compared lowercase
RESERVED_NAMES = {
    "you",
}

# =========================================
#   ADMIN
# =========================================
# Shared secret for adminLogin. Must be set in your environment:
#   ADMIN_PASSWORD=xxxxxxxxxxxx
# If missing, nobody can become admin.
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")

# =========================================
#   MODERATION
# =========================================
MUTE_DURATION_SECONDS = int(os.getenv("MUTE_DURATION_SECONDS", str(5 * 60)))

# Sent with every "banned" notice so the user knows where to appeal
BAN_APPEAL_LINK = os.getenv("BAN_APPEAL_LINK", "/appeal")

# =========================================
#   SOCKET.IO
# =========================================
# None → let Flask-SocketIO pick (eventlet when installed)
SOCKETIO_ASYNC_MODE = os.getenv("SOCKETIO_ASYNC_MODE") or None
CORS_ALLOWED_ORIGINS = os.getenv("CORS_ALLOWED_ORIGINS", "*")
