from __future__ import annotations

import secrets


def new_walk_id() -> str:
    return secrets.token_hex(8)
