from __future__ import annotations

import logging
from typing import Sequence

logger = logging.getLogger(__name__)


def chroot_cmd(ctx, target_root: str, argv: Sequence[str], message: str):
    """Run a command inside target root."""

    return ctx.guarded(["arch-chroot", target_root, *argv], message)
