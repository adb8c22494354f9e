from __future__ import annotations

import logging

from ..guard import FATAL_EXIT
from ..lib.block import get_uuid
from ..lib.bootloader import install_refind, kernel_options, refind_entry, write_refind_entry
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class InstallBootloaderStep:
    step_id = "70_install_bootloader"

    def run(self, ctx: InstallContext) -> None:
        st = ctx.state
        mnt = ctx.config.mount_root
        if not st.root_source:
            ctx.abort("Root filesystem not prepared; run the root step first", exit_code=FATAL_EXIT)

        install_refind(ctx, target_root=mnt)

        luks_uuid = get_uuid(ctx, st.crypt_part) if st.encrypted else None
        options = kernel_options(
            root_part=st.root_source,
            luks_uuid=luks_uuid,
            mapper_name=st.mapper_name or ctx.config.mapper_name,
        )
        write_refind_entry(ctx, target_root=mnt, entry=refind_entry(kernel=ctx.config.kernel, options=options))
        ctx.good(" > rEFInd configured (encrypted=%s)", st.encrypted)
