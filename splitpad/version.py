from __future__ import annotations

import importlib.metadata
import json
import os
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional

DIST_NAME = "splitpad"


class BuildInfo(NamedTuple):
    version: str
    commit: Optional[str]
    dirty: bool


def _package_version() -> str:
    try:
        return importlib.metadata.version(DIST_NAME)
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0+unknown"


def _run_git(args: list[str], cwd: Optional[str] = None) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=cwd or os.getcwd(),
                                      stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode().strip() or None


def _commit_from_checkout() -> tuple[Optional[str], bool]:
    here = Path(__file__).resolve().parent
    root = _run_git(["rev-parse", "--show-toplevel"], cwd=str(here))
    if not root:
        return None, False
    commit = _run_git(["rev-parse", "HEAD"], cwd=root)
    status = _run_git(["status", "--porcelain"], cwd=root)
    return commit, bool(status)


def _commit_from_direct_url() -> Optional[str]:
    # PEP 610 direct_url.json carries the VCS commit when installed from git
    try:
        dist = importlib.metadata.distribution(DIST_NAME)
    except importlib.metadata.PackageNotFoundError:
        return None
    for file in dist.files or []:
        if file.name == "direct_url.json":
            try:
                with Path(dist.locate_file(file)).open("r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, ValueError):
                return None
            return (data.get("vcs_info") or {}).get("commit_id")
    return None


def get_build_info() -> BuildInfo:
    commit, dirty = _commit_from_checkout()
    if commit is None:
        commit, dirty = _commit_from_direct_url(), False
    return BuildInfo(version=_package_version(), commit=commit, dirty=dirty)


def get_version_string() -> str:
    info = get_build_info()
    if info.commit is None:
        return f"splitpad {info.version}"
    dirty_suffix = "-dirty" if info.dirty else ""
    return f"splitpad {info.version} ({info.commit[:7]}{dirty_suffix})"
