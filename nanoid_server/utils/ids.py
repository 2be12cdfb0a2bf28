"""Compact ID generation for API responses."""

from __future__ import annotations

from nanoid_server.nanoid import generate_default
from nanoid_server.random_source import get_secure_random


def gen_id(prefix: str) -> str:
    """Return ``prefix_<nanoid>``, e.g. ``nanoids_V1StGXR8_Z5jdHi6B-myT``."""
    raw = generate_default(get_secure_random())
    return f"{prefix}_{raw.decode('ascii')}"
