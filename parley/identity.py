# ============================================
#     Parley: Identity & Join Protocol
#     Name validation, first login, rename
# ============================================

from parley.config import NAME_MIN_LENGTH, NAME_MAX_LENGTH, RESERVED_NAMES
from parley.protocol import join_success, join_error, banned, system
from parley.broadcast import send_to, broadcast_all, broadcast_others, broadcast_roster
from parley.logger import log_info, log_warning


NAME_LENGTH_ERROR = f"Name must be {NAME_MIN_LENGTH}-{NAME_MAX_LENGTH} characters."
NAME_RESERVED_ERROR = "That name is not allowed."
NAME_TAKEN_ERROR = "Username is already taken."


# =====================================================
#   NAME VALIDATION
# =====================================================

def is_valid_name(name: str) -> bool:
    """
    Trimmed name between NAME_MIN_LENGTH and NAME_MAX_LENGTH characters.
    """
    if not isinstance(name, str):
        return False

    name = name.strip()
    return NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH


def is_reserved_name(name: str) -> bool:
    """
    Returns True if the name is reserved. Case-insensitive.
    """
    if not isinstance(name, str):
        return False

    return name.strip().lower() in RESERVED_NAMES


def is_name_taken(registry, name, session) -> bool:
    """
    True if a logged-in session other than `session` holds `name`.
    """
    holder = registry.find_by_name(name)
    return holder is not None and holder.id != session.id


# =====================================================
#   setName
# =====================================================

def handle_set_name(ctx, session, msg):
    name = (msg.name or "").strip()

    if not is_valid_name(name):
        send_to(session, join_error(NAME_LENGTH_ERROR))
        return

    if is_reserved_name(name):
        send_to(session, join_error(NAME_RESERVED_ERROR))
        return

    if ctx.moderation.is_name_banned(name):
        log_warning("identity", f'Banned name "{name}" rejected (session={session.id}).')
        send_to(session, banned(ctx.appeal_link))
        ctx.drop(session)
        return

    if is_name_taken(ctx.registry, name, session):
        send_to(session, join_error(NAME_TAKEN_ERROR))
        return

    if session.is_logged_in:
        old_name = session.display_name
        session.display_name = name

        broadcast_all(ctx.registry, system(f"{old_name} is now known as {name}."))
        log_info("identity", f'Session {session.id} renamed "{old_name}" → "{name}".')
    else:
        session.display_name = name
        session.is_logged_in = True

        send_to(session, join_success(f"Welcome to the chat, {name}!"))
        broadcast_others(ctx.registry, system(f"{name} has joined the chat."), session)
        log_info("identity", f'Session {session.id} joined as "{name}".')

    broadcast_roster(ctx.registry)
