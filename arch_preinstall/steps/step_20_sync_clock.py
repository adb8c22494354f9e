from __future__ import annotations

import logging

from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class SyncClockStep:
    step_id = "20_sync_clock"

    def run(self, ctx: InstallContext) -> None:
        logger.info("\nUpdating system clock")
        ctx.guarded(["timedatectl", "set-ntp", "true"], "Could not update system clock")
        ctx.good(" > Clock updated")
