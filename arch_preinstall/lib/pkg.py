from __future__ import annotations

import logging
from typing import Mapping, Sequence

logger = logging.getLogger(__name__)


def repo_stanza(repo: Mapping[str, str]) -> str:
    """pacman.conf section for an on-disk repository (file://)."""

    return (
        f"[{repo['name']}]\n"
        "SigLevel = Optional TrustAll\n"
        f"Server = file://{repo['path']}\n"
    )


def add_local_repo(ctx, conf_path: str, repo: Mapping[str, str]) -> None:
    ctx.write_file(conf_path, repo_stanza(repo))
    logger.debug("Configured local repo %s in %s", repo["name"], conf_path)


def pacstrap(ctx, target_root: str, packages: Sequence[str]) -> None:
    if not packages:
        return
    ctx.guarded(["pacstrap", target_root, *packages], "Could not install base system")


def copy_local_repo(ctx, target_root: str, repo: Mapping[str, str]) -> None:
    """Make the local repository available inside the target as well."""

    dest = f"{target_root}{repo['path']}"
    ctx.guarded(["mkdir", "-p", dest], f"Could not create {dest}")
    ctx.guarded(["cp", "-r", f"{repo['path']}/.", dest], f"Could not copy {repo['path']} into target")
