from __future__ import annotations

import json
import re

_unsafe_chars_re = re.compile(r"[<>\"'&]")


def clean_username(value: str) -> str:
    """Undo the provider's form-encoding of spaces in display names."""

    return value.replace("+", " ")


def sanitize_input(value: str) -> str:
    return _unsafe_chars_re.sub("", value.strip())


def cache_key(game_code: str, user_id: str, zone_id: str | None) -> str:
    """Key for a lookup. JSON keeps ids containing separators from colliding."""

    return json.dumps([game_code, user_id, zone_id])
