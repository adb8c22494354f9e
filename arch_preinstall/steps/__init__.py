from .step_10_check_environment import CheckEnvironmentStep
from .step_20_sync_clock import SyncClockStep
from .step_30_partition import PartitionStep
from .step_40_prepare_root import PrepareRootStep
from .step_50_mount_boot import MountBootStep
from .step_60_install_base import InstallBaseStep
from .step_70_install_bootloader import InstallBootloaderStep
from .step_80_create_user import CreateUserStep

__all__ = [
    "CheckEnvironmentStep",
    "SyncClockStep",
    "PartitionStep",
    "PrepareRootStep",
    "MountBootStep",
    "InstallBaseStep",
    "InstallBootloaderStep",
    "CreateUserStep",
]
