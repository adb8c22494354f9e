from arch_preinstall.lib.bootloader import kernel_options, refind_entry
from arch_preinstall.lib.pkg import repo_stanza
from arch_preinstall.steps.step_60_install_base import hosts_file


def test_kernel_options_encrypted():
    opts = kernel_options(root_part="/dev/sda2", luks_uuid="1234-abcd", mapper_name="cryptroot")
    assert opts == (
        "cryptdevice=UUID=1234-abcd:cryptroot:allow-discards "
        "root=/dev/mapper/cryptroot rw add_efi_memmap"
    )


def test_kernel_options_plain():
    assert kernel_options(root_part="/dev/sda2", luks_uuid=None, mapper_name="cryptroot") == (
        "root=/dev/sda2 rw add_efi_memmap"
    )


def test_refind_entry():
    entry = refind_entry(kernel="linux", options="root=/dev/sda2 rw")
    assert entry.startswith('menuentry "Arch" {\n')
    assert "\tloader /vmlinuz-linux\n" in entry
    assert "\tinitrd /initramfs-linux.img\n" in entry
    assert '\toptions "root=/dev/sda2 rw"\n' in entry
    assert "\t\tinitrd /initramfs-linux-fallback.img\n" in entry
    assert entry.count("{") == entry.count("}")


def test_repo_stanza():
    assert repo_stanza({"name": "spacedome", "path": "/opt/spacedome"}) == (
        "[spacedome]\nSigLevel = Optional TrustAll\nServer = file:///opt/spacedome\n"
    )


def test_hosts_file():
    assert hosts_file("t470", "home.spacedome.tv").splitlines() == [
        "127.0.0.1 t470",
        "::1 t470",
        "127.0.1.1 t470.home.spacedome.tv t470",
    ]
