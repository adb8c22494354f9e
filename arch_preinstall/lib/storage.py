from __future__ import annotations

import logging
from dataclasses import dataclass

from ..state import partition_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PartitionPlan:
    disk: str
    boot_size: str = "512MiB"
    root_name: str = "root"


@dataclass(frozen=True)
class PartitionResult:
    boot_part: str
    root_part: str


def partition_gpt(ctx, *, plan: PartitionPlan) -> PartitionResult:
    """Write a fresh GPT with an ESP and a root partition, format the ESP.

    Layout:
    - 1: ESP (FAT32), 0% .. boot_size, esp flag set
    - 2: root, boot_size .. 100% (formatted later by the root stage)

    Every command here is irreversible and goes through the dangerous tier.
    """

    disk = plan.disk
    logger.debug("Partitioning disk=%s boot_size=%s", disk, plan.boot_size)

    ctx.dangerous(["parted", disk, "mklabel", "gpt"], f"Could not write GPT label on {disk}")
    ctx.dangerous(
        ["parted", "--align", "optimal", disk, "mkpart", "boot", "fat32", "0%", plan.boot_size],
        "Could not create boot partition",
    )
    ctx.dangerous(["parted", disk, "set", "1", "esp", "on"], "Could not set esp flag")
    ctx.dangerous(
        ["parted", "--align", "optimal", disk, "mkpart", plan.root_name, plan.boot_size, "100%"],
        "Could not create root partition",
    )

    boot_part = partition_path(disk, 1)
    ctx.dangerous(["mkfs.fat", "-F32", boot_part], f"Could not format {boot_part}")

    return PartitionResult(boot_part=boot_part, root_part=partition_path(disk, 2))
