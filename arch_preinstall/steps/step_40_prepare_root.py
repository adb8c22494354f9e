from __future__ import annotations

import logging

from ..logging_utils import RESET, YELLOW
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class PrepareRootStep:
    """Encrypt the root partition with LUKS, or mount it as-is."""

    step_id = "40_prepare_root"

    def run(self, ctx: InstallContext) -> None:
        logger.info("\n")
        choice = ctx.operator.choose(f"{YELLOW}Encrypt drive? [y/n] {RESET}", "yn")
        if choice == "y":
            self._encrypted(ctx)
        elif choice == "n":
            self._plain(ctx)
        else:
            ctx.abort("encryption choice declined")

    def _encrypted(self, ctx: InstallContext) -> None:
        st = ctx.state
        mnt = ctx.config.mount_root
        name = ctx.config.mapper_name
        mapper = f"/dev/mapper/{name}"

        part = ctx.operator.ask(f"\nSet partition for {name}", st.root_part or st.partition(2))
        ctx.dangerous(["cryptsetup", "-y", "-v", "luksFormat", part], f"Could not format {part} with LUKS")
        ctx.guarded(["cryptsetup", "open", part, name], f"Could not open {name}")
        ctx.dangerous(["mkfs.btrfs", "-L", name, mapper], f"Could not create filesystem on {mapper}")
        ctx.mount(mapper, mnt, f"Could not mount {name}")
        ctx.good(" > %s created on %s. Verifying", name, part)

        # Reopen from scratch to prove the passphrase and filesystem work.
        ctx.guarded(["umount", "-R", mnt], "Could not unmount")
        st.forget_mounts_under(mnt)
        ctx.guarded(["cryptsetup", "close", name], f"Could not close {name}")
        ctx.guarded(["cryptsetup", "open", part, name], f"Could not open {name}")
        ctx.mount(mapper, mnt, f"Could not mount {name}")
        ctx.good(" > Verified %s", name)

        st.encrypted = True
        st.crypt_part = part
        st.mapper_name = name
        st.root_part = part
        st.root_source = mapper
        ctx.good(" > %s mounted as root", name)

    def _plain(self, ctx: InstallContext) -> None:
        st = ctx.state
        mnt = ctx.config.mount_root

        part = ctx.operator.ask("\nSet partition for root", st.root_part or st.partition(2))
        if st.auto_partitioned:
            label = ctx.config.root_fs_label
            ctx.dangerous(["mkfs.btrfs", "-L", label, part], f"Could not create filesystem on {part}")
        ctx.mount(part, mnt, "Could not mount root")

        st.encrypted = False
        st.root_part = part
        st.root_source = part
        ctx.good(" > %s mounted as root", part)
