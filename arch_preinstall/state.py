from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional


def partition_path(disk: str, n: int) -> str:
    # nvme/mmcblk devices use p suffix
    if disk.endswith(tuple("0123456789")):
        return f"{disk}p{n}"
    return f"{disk}{n}"


@dataclass
class ProvisioningState:
    """What the session has done to the machine so far.

    Stages update this on success; later stages read it instead of querying
    lsblk/findmnt again.
    """

    disk: Optional[str] = None
    auto_partitioned: bool = False
    encrypted: bool = False
    crypt_part: Optional[str] = None
    mapper_name: Optional[str] = None
    root_part: Optional[str] = None
    root_source: Optional[str] = None
    boot_part: Optional[str] = None
    mounts: Dict[str, str] = field(default_factory=dict)

    def partition(self, n: int) -> str:
        if not self.disk:
            raise RuntimeError("Target disk not chosen; run partition step first")
        return partition_path(self.disk, n)

    def record_mount(self, source: str, target: str) -> None:
        self.mounts[target] = source

    def forget_mounts_under(self, target: str) -> None:
        prefix = target.rstrip("/") + "/"
        for mnt in [m for m in self.mounts if m == target or m.startswith(prefix)]:
            del self.mounts[mnt]
