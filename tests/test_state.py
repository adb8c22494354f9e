import pytest

from arch_preinstall.state import ProvisioningState, partition_path


@pytest.mark.parametrize(
    "disk,n,expected",
    [
        ("/dev/sda", 2, "/dev/sda2"),
        ("/dev/nvme0n1", 1, "/dev/nvme0n1p1"),
        ("/dev/mmcblk0", 2, "/dev/mmcblk0p2"),
    ],
)
def test_partition_path(disk, n, expected):
    assert partition_path(disk, n) == expected


def test_partition_requires_disk():
    with pytest.raises(RuntimeError):
        ProvisioningState().partition(1)


def test_mount_tracking():
    st = ProvisioningState(disk="/dev/sda")
    st.record_mount("/dev/mapper/cryptroot", "/mnt")
    st.record_mount("/dev/sda1", "/mnt/boot")
    st.record_mount("/dev/sdb1", "/mnt2")
    st.forget_mounts_under("/mnt")
    assert st.mounts == {"/mnt2": "/dev/sdb1"}
