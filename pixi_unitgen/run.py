"""Render systemd unit files from the pixi global manifest."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import jinja2

from .config import Privilege

log = logging.getLogger(__name__)

MANIFEST_FALLBACK = Path(".pixi/manifests/pixi-global.toml")


class ManifestError(ValueError):
    """The manifest is not valid TOML or lacks required fields."""


@dataclass
class Service:
    status: str
    after: str | None = None
    exec_start_pre: str | None = None
    exec_start: str | None = None


@dataclass
class EnvConfig:
    channels: list[str]
    dependencies: dict[str, str]
    exposed: dict[str, str] | None = None
    service: Service | None = None


@dataclass
class Manifest:
    version: Any
    envs: dict[str, EnvConfig]


@dataclass
class TemplateData:
    name: str
    description: str
    after: str
    exec_start_pre: str
    exec_start: str


def _require(table: dict, key: str, where: str):
    if key not in table:
        raise ManifestError(f"missing field `{key}` in {where}")
    return table[key]


def _table(value, where: str) -> dict:
    if not isinstance(value, dict):
        raise ManifestError(f"{where} must be a table")
    return value


def _string(value, where: str) -> str:
    if not isinstance(value, str):
        raise ManifestError(f"{where} must be a string")
    return value


def _optional_string(table: dict, key: str, where: str) -> str | None:
    if key not in table:
        return None
    return _string(table[key], f"{where}.{key}")


def _string_list(value, where: str) -> list[str]:
    if not isinstance(value, list):
        raise ManifestError(f"{where} must be an array")
    return [_string(item, f"{where} item") for item in value]


def _string_map(value, where: str) -> dict[str, str]:
    return {k: _string(v, f"{where}.{k}") for k, v in _table(value, where).items()}


def _parse_service(value, where: str) -> Service:
    table = _table(value, where)
    return Service(
        status=_string(_require(table, "status", where), f"{where}.status"),
        after=_optional_string(table, "after", where),
        exec_start_pre=_optional_string(table, "exec-start-pre", where),
        exec_start=_optional_string(table, "exec-start", where),
    )


def _parse_env(value, where: str) -> EnvConfig:
    table = _table(value, where)
    exposed = table.get("exposed")
    service = table.get("service")
    return EnvConfig(
        channels=_string_list(_require(table, "channels", where), f"{where}.channels"),
        dependencies=_string_map(
            _require(table, "dependencies", where), f"{where}.dependencies"
        ),
        exposed=None if exposed is None else _string_map(exposed, f"{where}.exposed"),
        service=None if service is None else _parse_service(service, f"{where}.service"),
    )


def parse_manifest(text: str) -> Manifest:
    """Parse the text of a pixi global manifest."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ManifestError(str(exc)) from exc
    version = _require(data, "version", "manifest")
    envs = _table(_require(data, "envs", "manifest"), "envs")
    return Manifest(
        version=version,
        envs={name: _parse_env(env, f"envs.{name}") for name, env in envs.items()},
    )


def read_template(template_path, privilege: Privilege) -> str:
    """Read the unit-file template, falling back to the project-local default."""
    if template_path is not None:
        path = Path(template_path)
        if path.is_file():
            return path.read_text()
    log.debug("Fallback: read from project-local file")
    fallback = Path.cwd() / privilege.unit_template
    content = fallback.read_text()
    log.debug("the content of the template %r", content)
    return content


def read_manifest(manifest_path) -> str:
    """Read the manifest, falling back to the one in the home directory."""
    if manifest_path is not None:
        try:
            return Path(manifest_path).read_text()
        except OSError:
            pass
    log.debug("Try the manifest fallback path")
    try:
        home = Path.home()
    except RuntimeError as exc:
        raise FileNotFoundError("HOME directory not found") from exc
    return (home / MANIFEST_FALLBACK).read_text()


def _check_version(version) -> None:
    if not isinstance(version, int) or isinstance(version, bool):
        log.warning("Manifest %s is not an integer, version 1 assumed", version)
    elif version == 1:
        log.info("Global manifest version 1")
    else:
        log.error("Manifest %s is not yet supported", version)


def run(normal_dir, early_dir, late_dir, privilege, template_path, manifest_path):
    """Write one unit file per manifest environment that declares a service.

    Returns the paths of the written unit files.
    """
    print("Running the application!")
    for directory in (normal_dir, early_dir, late_dir):
        Path(directory).parent.mkdir(parents=True, exist_ok=True)
    log.debug("created the output directories (if they did not exist)")

    environment = jinja2.Environment(
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )
    template = environment.from_string(read_template(template_path, privilege))

    manifest = parse_manifest(read_manifest(manifest_path))
    _check_version(manifest.version)

    written = []
    for name, env in manifest.envs.items():
        log.info("Environment: %s", name)
        log.info("  Channels: %r", env.channels)
        log.info("  Dependencies: %r", env.dependencies)
        log.info("  Exposed: %r", env.exposed)
        log.info("  Service: %r", env.service)
        if env.service is None:
            continue
        data = TemplateData(
            name=name,
            description=name,
            after="unknown",
            exec_start_pre="missing",
            exec_start="missing",
        )
        output_path = Path(normal_dir) / f"{name}.service"
        output_path.write_text(template.render(**asdict(data)))
        log.info("Wrote to: %s", output_path)
        written.append(output_path)
    return written