# src/pm_tracker/machines/device_id.py

from __future__ import annotations

import secrets

# No O/I/0/1: ids get read off labels and typed back in by hand.
DEVICE_ID_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
DEVICE_ID_PREFIX = "PM-"
DEVICE_ID_LENGTH = 8


def generate_device_id() -> str:
    """Random 'PM-XXXXXXXX' id. Uniqueness is not checked here."""
    suffix = "".join(secrets.choice(DEVICE_ID_ALPHABET) for _ in range(DEVICE_ID_LENGTH))
    return DEVICE_ID_PREFIX + suffix
