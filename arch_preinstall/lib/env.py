from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    efivars: str = "/sys/firmware/efi/efivars"
    pacman_conf: str = "/etc/pacman.conf"
    log_default: str = "/var/log/arch-preinstall.log"


PATHS = Paths()
