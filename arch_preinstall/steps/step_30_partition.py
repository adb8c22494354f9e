from __future__ import annotations

import logging
import os
from typing import Callable

from ..lib.storage import PartitionPlan, partition_gpt
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class PartitionStep:
    step_id = "30_partition"

    def __init__(self, exists: Callable[[str], bool] = os.path.exists):
        self._exists = exists

    def pick_disk(self, ctx: InstallContext) -> str:
        if ctx.config.target_disk:
            return ctx.config.target_disk
        candidates = ctx.config.disk_candidates
        # Fall back to the last candidate (/dev/sda) when none is present.
        return next((d for d in candidates if self._exists(d)), candidates[-1])

    def run(self, ctx: InstallContext) -> None:
        logger.info("\n")
        ctx.checked(["parted", "-l"], "Could not show partitions")

        disk = self.pick_disk(ctx)
        ctx.state.disk = disk

        choice = ctx.operator.choose(f"\nFormat {disk} for GPT? Manually partition? [y/n/m]", "ynm")
        if choice == "y":
            result = partition_gpt(
                ctx,
                plan=PartitionPlan(disk=disk, boot_size=ctx.config.boot_size, root_name=ctx.config.root_fs_label),
            )
            ctx.state.auto_partitioned = True
            ctx.state.boot_part = result.boot_part
            ctx.state.root_part = result.root_part
            ctx.good(" > Partitions created")
        elif choice == "m":
            ctx.guarded(["parted", disk], "Manual partitioning failed")
        else:
            ctx.abort("partitioning declined")
