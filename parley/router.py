# ============================================
#     Parley: Message Router
#     ANONYMOUS → LOGGED_IN, dispatch by inbound variant
# ============================================

from parley import admin, identity
from parley.protocol import (
    parse_inbound,
    AdminAddWord,
    AdminBan,
    AdminBroadcast,
    AdminCommand,
    AdminLogin,
    AdminMute,
    AdminRemoveWord,
    AdminUnban,
    AdminWarn,
    ChatMessage,
    SetName,
    Unknown,
    chat_message,
    system,
)
from parley.broadcast import send_to, broadcast_others
from parley.logger import log_info, log_warning, log_exception


MUTED_NOTICE = "You are muted and cannot send messages."
BLOCKED_NOTICE = "Your message was blocked because it contains a banned word."

# Processed even before login
ANONYMOUS_ALLOWED = (SetName, AdminLogin)


# =====================================================
#   message
# =====================================================

def handle_message(ctx, session, msg):
    # Whitespace-only bodies are dropped; others are relayed as typed
    text = msg.text
    if not text.strip():
        return

    if ctx.moderation.is_muted(session.id):
        send_to(session, system(MUTED_NOTICE))
        return

    if ctx.moderation.contains_banned_word(text):
        send_to(session, system(BLOCKED_NOTICE))
        log_info("router", f'Blocked message from "{session.display_name}" (banned word).')
        return

    broadcast_others(ctx.registry, chat_message(session.display_name, text), session)


HANDLERS = {
    SetName: identity.handle_set_name,
    AdminLogin: admin.handle_admin_login,
    ChatMessage: handle_message,
    AdminBroadcast: admin.handle_broadcast,
    AdminWarn: admin.handle_warn,
    AdminMute: admin.handle_mute,
    AdminBan: admin.handle_ban,
    AdminUnban: admin.handle_unban,
    AdminAddWord: admin.handle_add_word,
    AdminRemoveWord: admin.handle_remove_word,
}


# =====================================================
#   ROUTER
# =====================================================

def dispatch(ctx, session, raw):
    """
    Handle one inbound frame for `session`.

    Returns True if a handler ran. Malformed frames, unknown types,
    pre-login traffic other than setName/adminLogin and admin commands
    from non-admins are all dropped without a reply.
    """
    msg = parse_inbound(raw)

    if msg is None:
        log_warning("router", f"Dropped malformed frame from session={session.id}")
        return False

    if isinstance(msg, Unknown):
        return False

    if not session.is_logged_in and not isinstance(msg, ANONYMOUS_ALLOWED):
        return False

    if isinstance(msg, AdminCommand) and not session.is_admin:
        log_warning("router", f'Non-admin "{session.display_name}" sent {type(msg).__name__}.')
        return False

    handler = HANDLERS.get(type(msg))
    if handler is None:
        return False

    try:
        with ctx.lock:
            handler(ctx, session, msg)
    except Exception:
        log_exception("router", f"Error handling {type(msg).__name__} from session={session.id}")

    return True
