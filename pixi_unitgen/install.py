"""Install symlinks to the generator into the systemd generator directories."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from .config import SYSTEM_EXEC_NAME, USER_EXEC_NAME

log = logging.getLogger(__name__)

SYSTEM_GENERATOR_DIRS = (
    Path("/run/systemd/system-generators/"),
    Path("/etc/systemd/system-generators/"),
    Path("/usr/local/lib/systemd/system-generators/"),
    Path("/usr/lib/systemd/system-generators/"),
)

USER_GENERATOR_DIRS = (
    Path("/run/systemd/user-generators/"),
    Path("/etc/systemd/user-generators/"),
    Path("/usr/local/lib/systemd/user-generators/"),
    Path("/usr/lib/systemd/user-generators/"),
)


def create_symlink(source_path, target_path) -> None:
    """Create a symlink at target_path pointing to source_path."""
    log.debug("create symlink %s -> %s", target_path, source_path)
    os.symlink(Path(source_path), Path(target_path))


def _link_first(source_path, dirs: Iterable, exec_name: str) -> Path | None:
    for directory in dirs:
        target = Path(directory) / exec_name
        log.debug("%s", target)
        try:
            create_symlink(source_path, target)
        except OSError as exc:
            log.debug("could not link %s: %s", target, exc)
            continue
        return target
    return None


def initialize(source_path, system_dirs=None, user_dirs=None):
    """Link the executable into the first usable system and user generator dirs.

    Returns the pair of created links; an entry is None where no directory
    accepted the link.
    """
    log.info("Initialization process started!")
    system_link = _link_first(
        source_path,
        SYSTEM_GENERATOR_DIRS if system_dirs is None else system_dirs,
        SYSTEM_EXEC_NAME,
    )
    user_link = _link_first(
        source_path,
        USER_GENERATOR_DIRS if user_dirs is None else user_dirs,
        USER_EXEC_NAME,
    )
    return system_link, user_link