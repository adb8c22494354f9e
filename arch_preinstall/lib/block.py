from __future__ import annotations

import logging

from ..guard import FATAL_EXIT

logger = logging.getLogger(__name__)

SIMULATED_UUID = "<uuid>"


def get_uuid(ctx, dev: str) -> str:
    """Return the UUID of a block device (LUKS header or filesystem)."""

    r = ctx.guarded(["blkid", "-s", "UUID", "-o", "value", dev], f"Could not read UUID of {dev}")
    if r.simulated:
        return SIMULATED_UUID
    uuid = r.stdout.strip()
    if not uuid:
        ctx.abort(f"Unable to determine UUID for {dev}", exit_code=FATAL_EXIT)
    return uuid
