"""Message id generation."""

from __future__ import annotations

import uuid
from collections.abc import Callable

IdGenerator = Callable[[], str]


def generate_id() -> str:
    return str(uuid.uuid4())


__all__ = ["IdGenerator", "generate_id"]
