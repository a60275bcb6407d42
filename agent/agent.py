"""
X11 Sentinel Client — Desktop Agent
===================================
Collects pointer motion, scroll, touch and button events on the desktop
session and submits them in sequenced chunks to the collection server.
It does NOT record keystrokes, screen content, or file access.

Usage:
    python agent.py [--submit-url URL] [--user-id ID] ...
"""

from sentinel_core.runner import cli


if __name__ == "__main__":
    cli()
