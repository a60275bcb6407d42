"""
Linux desktop-session helpers:
  - Desktop session identifier (`who` output)
  - Session lock via an external utility (slock, i3lock, ...)
  - Desktop notifications (notify-send)
"""

import shutil
import subprocess

from .config import log
from .constants import APP_NAME


# ─── Session identifier ──────────────────────────────────────────

def get_session_id():
    """
    Output of `who` with all whitespace stripped. Identifies the logged-in
    desktop session. Returns "" when `who` is unavailable.
    """
    try:
        result = subprocess.run(["who"], capture_output=True, text=True, timeout=10)
    except (OSError, subprocess.SubprocessError) as e:
        log.warning("Could not execute `who`: %s", e)
        return ""
    return "".join(result.stdout.split())


# ─── Session lock ────────────────────────────────────────────────

def lock_session(lock_utility):
    """
    Start the lock utility without waiting for it (it blocks until unlock).
    Returns True if the process was spawned.
    """
    if not shutil.which(lock_utility):
        log.error("Lock utility not found: %s", lock_utility)
        return False
    try:
        subprocess.Popen([lock_utility], stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
        log.warning("Session locked via %s", lock_utility)
        return True
    except OSError as e:
        log.error("Could not start lock utility %s: %s", lock_utility, e)
        return False


# ─── Notifications ───────────────────────────────────────────────

def show_notification(summary, body):
    """Show a desktop notification. Returns True on success."""
    cmd = ["notify-send", "--app-name", APP_NAME, summary, body]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=10)
        if result.returncode == 0:
            return True
        log.warning("notify-send failed (%d): %s", result.returncode, result.stderr.strip())
        return False
    except (OSError, subprocess.SubprocessError) as e:
        log.warning("Could not show notification: %s", e)
        return False
