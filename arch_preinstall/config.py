from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

DEFAULT_GROUPS = ["wheel", "users", "uucp", "video", "audio", "storage", "input", "log", "sys", "adm"]


@dataclass(frozen=True)
class InstallConfig:
    """The installation recipe. Every key is optional."""

    raw: Dict[str, Any] = field(default_factory=dict)

    def _section(self, name: str) -> Dict[str, Any]:
        return self.raw.get(name) or {}

    @property
    def mount_root(self) -> str:
        return str(self.raw.get("mount_root") or "/mnt")

    @property
    def network_host(self) -> str:
        return str(self.raw.get("network_host") or "archlinux.org")

    @property
    def target_disk(self) -> Optional[str]:
        disk = self._section("disk").get("device")
        return str(disk) if disk else None

    @property
    def disk_candidates(self) -> List[str]:
        return list(self._section("disk").get("candidates") or ["/dev/nvme0n1", "/dev/sda"])

    @property
    def boot_size(self) -> str:
        return str(self._section("disk").get("boot_size") or "512MiB")

    @property
    def root_fs_label(self) -> str:
        return str(self._section("disk").get("root_label") or "root")

    @property
    def mapper_name(self) -> str:
        return str(self._section("encryption").get("mapper_name") or "cryptroot")

    @property
    def hostname(self) -> str:
        return str(self.raw.get("hostname") or "t470")

    @property
    def domain(self) -> str:
        return str(self.raw.get("domain") or "home.spacedome.tv")

    @property
    def locale(self) -> str:
        return str(self.raw.get("locale") or "en_US.UTF-8")

    @property
    def packages(self) -> List[str]:
        return list(self.raw.get("packages") or ["spacedome-t470"])

    @property
    def local_repo(self) -> Optional[Dict[str, str]]:
        repo = self.raw.get("local_repo", {"name": "spacedome", "path": "/opt/spacedome"})
        if not repo:
            return None
        return {"name": str(repo.get("name") or "spacedome"), "path": str(repo.get("path") or "/opt/spacedome")}

    @property
    def mkinitcpio_conf(self) -> Optional[str]:
        value = self.raw.get("mkinitcpio_conf", "mkinitcpio.conf")
        return str(value) if value else None

    @property
    def kernel(self) -> str:
        return str(self.raw.get("kernel") or "linux")

    @property
    def username(self) -> str:
        return str(self._section("user").get("name") or "julien")

    @property
    def user_groups(self) -> List[str]:
        return list(self._section("user").get("groups") or DEFAULT_GROUPS)


def load_config(path: Optional[str]) -> InstallConfig:
    if not path:
        return InstallConfig()

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("install config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read the install config") from e

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError("install config must contain a mapping/object")

    return InstallConfig(raw=raw)
