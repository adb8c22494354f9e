from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def is_online(ctx, host: str) -> bool:
    """Reachability check; always executed, even in simulate mode."""

    r = ctx.checked(["ping", "-c", "3", host], f"Cannot connect to {host}")
    return r.ok
