from __future__ import annotations

import logging

from ..lib.chroot import chroot_cmd
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class CreateUserStep:
    step_id = "80_create_user"

    def run(self, ctx: InstallContext) -> None:
        cfg = ctx.config
        groups = ",".join(cfg.user_groups)
        chroot_cmd(
            ctx,
            cfg.mount_root,
            ["useradd", "-mU", "-G", groups, cfg.username],
            f"Could not create user {cfg.username}",
        )
        ctx.good(" > User %s created", cfg.username)
