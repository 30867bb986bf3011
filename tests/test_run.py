import jinja2
import pytest

from pixi_unitgen.config import USER_UNIT_FILE_TEMPLATE, Privilege
from pixi_unitgen.run import (
    ManifestError,
    Service,
    parse_manifest,
    read_manifest,
    read_template,
    run,
)

MANIFEST = """
version = 1

[envs.web]
channels = ["conda-forge"]
dependencies = { nginx = "*" }
exposed = { nginx = "nginx" }

[envs.web.service]
status = "enabled"
after = "network.target"
exec-start = "nginx -g 'daemon off;'"

[envs.tools]
channels = ["conda-forge"]
dependencies = { ripgrep = "*" }
"""

TEMPLATE = "Description={{ description }}\nAfter={{ after }}\nExecStart={{ exec_start }}\n"


def test_parse_manifest_fields():
    manifest = parse_manifest(MANIFEST)
    assert manifest.version == 1
    assert list(manifest.envs) == ["web", "tools"]
    web = manifest.envs["web"]
    assert web.channels == ["conda-forge"]
    assert web.exposed == {"nginx": "nginx"}
    assert web.service == Service(
        status="enabled",
        after="network.target",
        exec_start_pre=None,
        exec_start="nginx -g 'daemon off;'",
    )
    assert manifest.envs["tools"].service is None
    assert manifest.envs["tools"].exposed is None


def test_parse_manifest_missing_envs():
    with pytest.raises(ManifestError):
        parse_manifest("version = 1\n")


def test_parse_manifest_service_requires_status():
    text = """
version = 1
[envs.a]
channels = []
dependencies = {}
[envs.a.service]
after = "x"
"""
    with pytest.raises(ManifestError):
        parse_manifest(text)


def test_parse_manifest_invalid_toml():
    with pytest.raises(ManifestError):
        parse_manifest("version = = 1")


def test_read_template_from_given_file(tmp_path):
    path = tmp_path / "t.tera"
    path.write_text(TEMPLATE)
    assert read_template(path, Privilege.SYSTEM) == TEMPLATE


def test_read_template_falls_back_to_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    fallback = tmp_path / USER_UNIT_FILE_TEMPLATE
    fallback.parent.mkdir(parents=True)
    fallback.write_text("fallback {{ name }}")
    assert read_template(tmp_path / "absent.tera", Privilege.UNSPEC) == "fallback {{ name }}"


def test_read_template_missing_everywhere(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        read_template(None, Privilege.SYSTEM)


def test_read_manifest_given_path(tmp_path):
    path = tmp_path / "m.toml"
    path.write_text(MANIFEST)
    assert read_manifest(path) == MANIFEST


def test_read_manifest_falls_back_to_home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    fallback = tmp_path / ".pixi/manifests/pixi-global.toml"
    fallback.parent.mkdir(parents=True)
    fallback.write_text(MANIFEST)
    assert read_manifest(tmp_path / "absent.toml") == MANIFEST


def test_read_manifest_missing_everywhere(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    with pytest.raises(FileNotFoundError):
        read_manifest(None)


@pytest.fixture
def inputs(tmp_path):
    template = tmp_path / "t.tera"
    template.write_text(TEMPLATE)
    manifest = tmp_path / "m.toml"
    manifest.write_text(MANIFEST)
    out = tmp_path / "out"
    out.mkdir()
    return template, manifest, out


def test_run_writes_service_units(inputs, capsys):
    template, manifest, out = inputs
    written = run(out, out, out, Privilege.USER, template, manifest)
    assert written == [out / "web.service"]
    assert (out / "web.service").read_text() == (
        "Description=web\nAfter=unknown\nExecStart=missing\n"
    )
    assert not (out / "tools.service").exists()
    assert "Running the application!" in capsys.readouterr().out


def test_run_creates_parent_directories(tmp_path, inputs):
    template, _, _ = inputs
    manifest = tmp_path / "empty.toml"
    manifest.write_text("version = 1\n[envs]\n")
    normal = tmp_path / "gen" / "normal"
    assert run(normal, normal, normal, Privilege.USER, template, manifest) == []
    assert (tmp_path / "gen").is_dir()


def test_run_undefined_template_variable(inputs):
    template, manifest, out = inputs
    template.write_text("{{ nonexistent }}")
    with pytest.raises(jinja2.UndefinedError):
        run(out, out, out, Privilege.USER, template, manifest)