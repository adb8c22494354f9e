from __future__ import annotations

import logging
from pathlib import Path

from ..lib.chroot import chroot_cmd
from ..lib.env import PATHS
from ..lib.pkg import add_local_repo, copy_local_repo, pacstrap
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


def hosts_file(hostname: str, domain: str) -> str:
    return (
        f"127.0.0.1 {hostname}\n"
        f"::1 {hostname}\n"
        f"127.0.1.1 {hostname}.{domain} {hostname}\n"
    )


class InstallBaseStep:
    step_id = "60_install_base"

    def run(self, ctx: InstallContext) -> None:
        cfg = ctx.config
        mnt = cfg.mount_root
        repo = cfg.local_repo

        if repo:
            add_local_repo(ctx, PATHS.pacman_conf, repo)
        pacstrap(ctx, mnt, cfg.packages)

        fstab = ctx.guarded(["genfstab", "-U", mnt], "Could not generate fstab")
        ctx.write_file(f"{mnt}/etc/fstab", fstab.stdout)
        ctx.write_file(f"{mnt}/etc/hostname", f"{cfg.hostname}\n", append=False)

        if repo:
            add_local_repo(ctx, f"{mnt}/etc/pacman.conf", repo)
            copy_local_repo(ctx, mnt, repo)

        ctx.write_file(f"{mnt}/etc/hosts", hosts_file(cfg.hostname, cfg.domain))
        ctx.write_file(f"{mnt}/etc/locale.conf", f"LANG={cfg.locale}\n", append=False)

        conf = cfg.mkinitcpio_conf
        if conf and Path(conf).is_file():
            ctx.guarded(["cp", conf, f"{mnt}/etc/mkinitcpio.conf"], "Could not copy mkinitcpio.conf")
        elif conf:
            logger.warning(" > %s not found, keeping the default mkinitcpio.conf", conf)

        chroot_cmd(ctx, mnt, ["mkinitcpio", "-p", cfg.kernel], "Could not build initramfs")
        chroot_cmd(ctx, mnt, ["passwd"], "Could not set root password")
        ctx.good(" > Base system installed")
