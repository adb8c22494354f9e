from __future__ import annotations

import logging

from ..guard import FATAL_EXIT
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class MountBootStep:
    step_id = "50_mount_boot"

    def run(self, ctx: InstallContext) -> None:
        st = ctx.state
        mnt = ctx.config.mount_root
        if mnt not in st.mounts:
            ctx.abort(f"{mnt} is not mounted; run the root step first", exit_code=FATAL_EXIT)

        part = ctx.operator.ask("\nSet partition for boot", st.boot_part or st.partition(1))
        ctx.guarded(["mkdir", "-p", f"{mnt}/boot"], "Could not make boot mount point")
        ctx.mount(part, f"{mnt}/boot", "Could not mount boot")
        st.boot_part = part
        ctx.good(" > boot mounted")

        logger.info("\n\nSetup complete, ready for install\n")
