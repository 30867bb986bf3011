"""Command-line entry point of the systemd generator."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from enum import StrEnum
from pathlib import Path

import jinja2

from . import install, run
from .config import Privilege

log = logging.getLogger(__name__)


class Mode(StrEnum):
    RUN = "run"
    INIT = "init"


def grab_base(argv0: str) -> tuple[Path, str]:
    """Resolve the invoked path; return it with the real executable's name."""
    alias = Path(argv0).name or "unknown"
    if not argv0:
        raise FileNotFoundError("empty executable path")
    resolved = Path(argv0).resolve(strict=True)
    log.info("Alias (invoked as): %s", alias)
    log.info("Resolved to binary: %s", resolved.name)
    return resolved, resolved.name


def check_base(name: str) -> Privilege:
    """Derive the privilege from SYSTEMD_SCOPE compared with the executable name."""
    log.warning("name check %s", name)
    scope = os.environ.get("SYSTEMD_SCOPE")
    if scope is None:
        log.warning("SYSTEMD_SCOPE is not set")
        return Privilege.UNSPEC
    if scope == name:
        log.info("System level")
        return Privilege.SYSTEM
    log.warning("SYSTEMD_SCOPE is not a valid value %s", scope)
    return Privilege.UNSPEC


def check_normal_dir(normal_dir) -> bool:
    log.warning("normal dir check %s", normal_dir)
    return True


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="systemd-pixi-generator",
        description="A systemd generator for pixi global environments",
    )
    parser.add_argument("dirs", nargs="*", type=Path)
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--mode", type=Mode, choices=list(Mode), default=Mode.RUN)
    parser.add_argument("-m", "--manifest", dest="manifest_path", type=Path)
    parser.add_argument("-t", "--template", dest="template_path", type=Path)
    args = parser.parse_args(argv)
    if len(args.dirs) > 3:
        parser.error("at most 3 directories may be given")
    return args


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    argv0 = sys.argv[0] if sys.argv else ""
    resolved_path, real_base = grab_base(argv0)
    privilege = check_base(real_base)
    cwd = Path.cwd()

    dirs = list(args.dirs) + [cwd] * (3 - len(args.dirs))
    normal_dir, early_dir, late_dir = dirs

    for label, path in (("normal_dir", normal_dir), ("early_dir", early_dir), ("late_dir", late_dir)):
        if not path.exists():
            log.error("Error: path '%s' (%s) does not exist", label, path)
            return 1
    check_normal_dir(normal_dir)
    log.info("directories: normal=%s, early=%s, late=%s", normal_dir, early_dir, late_dir)

    try:
        if args.mode is Mode.INIT:
            install.initialize(resolved_path)
        else:
            run.run(
                normal_dir,
                early_dir,
                late_dir,
                privilege,
                args.template_path,
                args.manifest_path,
            )
    except (OSError, run.ManifestError, jinja2.TemplateError) as exc:
        log.error("%s", exc)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())