import pytest

from arch_preinstall.config import DEFAULT_GROUPS, InstallConfig, load_config


def test_defaults_without_file():
    cfg = load_config(None)
    assert cfg.mount_root == "/mnt"
    assert cfg.network_host == "archlinux.org"
    assert cfg.target_disk is None
    assert cfg.disk_candidates == ["/dev/nvme0n1", "/dev/sda"]
    assert cfg.packages == ["spacedome-t470"]
    assert cfg.local_repo == {"name": "spacedome", "path": "/opt/spacedome"}
    assert cfg.user_groups == DEFAULT_GROUPS
    assert cfg.mapper_name == "cryptroot"


def test_yaml_overrides(tmp_path):
    p = tmp_path / "install.yaml"
    p.write_text(
        "disk:\n"
        "  device: /dev/vda\n"
        "  boot_size: 1GiB\n"
        "hostname: box\n"
        "packages: [base, linux]\n"
        "local_repo: null\n"
        "user:\n"
        "  name: ops\n"
        "  groups: [wheel]\n",
        encoding="utf-8",
    )
    cfg = load_config(str(p))
    assert cfg.target_disk == "/dev/vda"
    assert cfg.boot_size == "1GiB"
    assert cfg.hostname == "box"
    assert cfg.packages == ["base", "linux"]
    assert cfg.local_repo is None
    assert cfg.username == "ops"
    assert cfg.user_groups == ["wheel"]


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.yaml"))


def test_rejects_non_yaml(tmp_path):
    p = tmp_path / "install.json"
    p.write_text("{}", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(p))


def test_rejects_non_mapping(tmp_path):
    p = tmp_path / "install.yml"
    p.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(p))


def test_empty_yaml_is_defaults(tmp_path):
    p = tmp_path / "install.yaml"
    p.write_text("", encoding="utf-8")
    assert load_config(str(p)) == InstallConfig()
