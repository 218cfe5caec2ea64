# ============================================
#     Parley: Admin Commands
#     adminLogin + privileged moderation actions
# ============================================

import hmac

from parley.protocol import (
    admin_success,
    banned,
    banned_user_list,
    banned_word_list,
    system,
)
from parley.broadcast import send_to, broadcast_all, broadcast_admins, broadcast_roster
from parley.logger import log_info, log_warning


ADMIN_LOGIN_FAILED = "Admin login failed."


def _notify(session, text):
    send_to(session, system(text))


def _push_ban_list(ctx):
    broadcast_admins(ctx.registry, banned_user_list(ctx.moderation.banned_name_list()))


def _push_word_list(ctx):
    broadcast_admins(ctx.registry, banned_word_list(ctx.moderation.banned_word_list()))


def _find_target(ctx, admin, name):
    """
    Logged-in session holding `name`, or None after telling the admin.
    """
    target = ctx.registry.find_by_name(name)
    if target is None:
        _notify(admin, f"User '{name.strip()}' not found.")
    return target


# =====================================================
#   adminLogin
# =====================================================

def handle_admin_login(ctx, session, msg):
    secret = ctx.admin_password or ""
    supplied = msg.password or ""

    # Never succeed against an unset secret
    if not secret or not hmac.compare_digest(supplied.encode("utf-8"), secret.encode("utf-8")):
        _notify(session, ADMIN_LOGIN_FAILED)
        log_warning("admin", f"Failed admin login (session={session.id}).")
        return

    session.is_admin = True

    send_to(session, admin_success())
    send_to(session, banned_word_list(ctx.moderation.banned_word_list()))
    send_to(session, banned_user_list(ctx.moderation.banned_name_list()))

    log_info("admin", f'Session {session.id} ("{session.display_name}") is now admin.')


# =====================================================
#   adminBroadcast
# =====================================================

def handle_broadcast(ctx, admin, msg):
    text = msg.text.strip()
    if not text:
        return

    broadcast_all(ctx.registry, system(f"[Admin] {text}"))
    log_info("admin", f'Announcement by "{admin.display_name}": {text[:80]}')


# =====================================================
#   adminWarn
# =====================================================

def handle_warn(ctx, admin, msg):
    target = _find_target(ctx, admin, msg.name)
    if target is None:
        return

    total = ctx.moderation.warn(target.id)

    _notify(target, f"You have been warned by an admin. Total warnings: {total}.")
    _notify(admin, f"{target.display_name} has been warned ({total} total).")

    log_info("admin", f'"{admin.display_name}" warned "{target.display_name}" (total={total}).')


# =====================================================
#   adminMute
# =====================================================

def handle_mute(ctx, admin, msg):
    target = _find_target(ctx, admin, msg.name)
    if target is None:
        return

    def _on_expire():
        # Still connected?
        if target.id in ctx.registry:
            _notify(target, "You are no longer muted.")

    if not ctx.moderation.mute(target.id, ctx.mute_duration, _on_expire):
        _notify(admin, f"{target.display_name} is already muted.")
        return

    minutes = ctx.mute_duration / 60
    duration = f"{minutes:g} minute(s)" if ctx.mute_duration >= 60 else f"{ctx.mute_duration:g} second(s)"

    _notify(target, f"You have been muted by an admin for {duration}.")
    _notify(admin, f"{target.display_name} has been muted for {duration}.")

    log_info("admin", f'"{admin.display_name}" muted "{target.display_name}" ({ctx.mute_duration}s).')


# =====================================================
#   adminBan / adminUnban
# =====================================================

def handle_ban(ctx, admin, msg):
    name = msg.name.strip()
    if not name:
        _notify(admin, "Usage: adminBan <name>")
        return

    if not ctx.moderation.ban_name(name):
        _notify(admin, f"'{name}' is already banned.")
        return

    _push_ban_list(ctx)

    target = ctx.registry.find_by_name(name)
    if target is None:
        _notify(admin, f"'{name}' is not online. The ban is recorded and applies on their next join.")
        log_info("admin", f'"{admin.display_name}" banned offline name "{name}".')
        return

    send_to(target, banned(ctx.appeal_link))
    ctx.drop(target, announce=False)

    broadcast_all(ctx.registry, system(f"{target.display_name} has been banned."))
    broadcast_roster(ctx.registry)

    log_info("admin", f'"{admin.display_name}" banned and disconnected "{target.display_name}".')


def handle_unban(ctx, admin, msg):
    name = msg.name.strip()

    if ctx.moderation.unban_name(name):
        _notify(admin, f"'{name}' has been unbanned.")
        log_info("admin", f'"{admin.display_name}" unbanned "{name}".')
    else:
        _notify(admin, f"'{name}' is not on the ban list.")

    _push_ban_list(ctx)


# =====================================================
#   adminAddWord / adminRemoveWord
# =====================================================

def handle_add_word(ctx, admin, msg):
    word = msg.word.strip()
    if not word:
        _notify(admin, "Usage: adminAddWord <word>")
        return

    if ctx.moderation.add_word(word):
        log_info("admin", f'"{admin.display_name}" added banned word "{word.lower()}".')
    else:
        _notify(admin, f"'{word}' is already a banned word.")

    _push_word_list(ctx)


def handle_remove_word(ctx, admin, msg):
    word = msg.word.strip()

    if ctx.moderation.remove_word(word):
        log_info("admin", f'"{admin.display_name}" removed banned word "{word.lower()}".')
    else:
        _notify(admin, f"'{word}' is not on the banned word list.")

    _push_word_list(ctx)
