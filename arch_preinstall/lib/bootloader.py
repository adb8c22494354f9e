from __future__ import annotations

import logging
from typing import Optional

from .chroot import chroot_cmd

logger = logging.getLogger(__name__)

REFIND_CONF = "boot/EFI/refind/refind.conf"


def kernel_options(*, root_part: Optional[str], luks_uuid: Optional[str], mapper_name: str) -> str:
    if luks_uuid:
        return (
            f"cryptdevice=UUID={luks_uuid}:{mapper_name}:allow-discards "
            f"root=/dev/mapper/{mapper_name} rw add_efi_memmap"
        )
    return f"root={root_part} rw add_efi_memmap"


def refind_entry(*, kernel: str, options: str) -> str:
    """rEFInd menu entry for an Arch kernel with fallback and terminal boots."""

    return (
        'menuentry "Arch" {\n'
        "\ticon /EFI/refind/icons/os_arch.png\n"
        '\tvolume "UUID of boot"\n'
        f"\tloader /vmlinuz-{kernel}\n"
        f"\tinitrd /initramfs-{kernel}.img\n"
        f'\toptions "{options}"\n'
        '\tsubmenuentry "Boot using fallback initramfs" {\n'
        f"\t\tinitrd /initramfs-{kernel}-fallback.img\n"
        "\t}\n"
        '\tsubmenuentry "Boot to terminal" {\n'
        '\t\tadd_options "systemd.unit=multi-user.target"\n'
        "\t}\n"
        "}\n"
    )


def install_refind(ctx, *, target_root: str) -> None:
    chroot_cmd(ctx, target_root, ["refind-install"], "Could not install rEFInd")
    logger.debug("rEFInd installed")


def write_refind_entry(ctx, *, target_root: str, entry: str) -> None:
    ctx.write_file(f"{target_root}/{REFIND_CONF}", entry)
