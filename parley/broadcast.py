# ============================================
#     Parley: Broadcast Engine
#     One JSON envelope per recipient, closed channels skipped
# ============================================

from parley.protocol import encode, user_list
from parley.logger import log_exception


def send_to(session, payload):
    """
    Fire-and-forget delivery to a single session.
    Returns True if the frame was handed to the transport.
    """
    channel = session.channel
    if channel is None or not channel.is_open:
        return False

    try:
        channel.send(encode(payload))
        return True
    except Exception:
        log_exception("broadcast", f"Delivery failed for session={session.id}")
        return False


def broadcast_all(registry, payload):
    """Every logged-in session."""
    for s in registry.logged_in():
        send_to(s, payload)


def broadcast_others(registry, payload, sender):
    """Every logged-in session except `sender`."""
    for s in registry.logged_in():
        if s.id == sender.id:
            continue
        send_to(s, payload)


def broadcast_admins(registry, payload):
    """Every admin, logged in or not."""
    for s in registry.admins():
        send_to(s, payload)


def broadcast_roster(registry):
    """Refresh the user list of every logged-in session."""
    broadcast_all(registry, user_list(registry.roster()))
