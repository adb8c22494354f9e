from __future__ import annotations

import logging
from pathlib import Path

from ..lib.env import PATHS
from ..lib.net import is_online
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class CheckEnvironmentStep:
    step_id = "10_check_environment"

    def __init__(self, efivars: str = PATHS.efivars):
        self.efivars = efivars

    def run(self, ctx: InstallContext) -> None:
        logger.info("Checking if booted into UEFI mode")
        if Path(self.efivars).is_dir():
            ctx.good("Booted into UEFI mode")
        else:
            logger.warning(" > Potentially booted into BIOS mode")
            if not ctx.operator.confirm():
                ctx.abort("operator stopped on BIOS boot")

        host = ctx.config.network_host
        logger.info("\nChecking network connection")
        if not is_online(ctx, host):
            logger.error(" > Cannot connect to %s", host)
            ctx.abort(f"no network connection to {host}")
        ctx.good(" > Network connection active")
