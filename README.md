# pixi-unitgen

pixi-unitgen is a systemd generator for pixi global environments. It reads the
pixi global manifest, which by default is `~/.pixi/manifests/pixi-global.toml`.
For every environment that declares a `service` table, it renders a Jinja2
unit-file template and writes `<name>.service` into the generator's normal
output directory.

## Installation

```
pip install .
```

## Usage

systemd starts a generator with up to three output directories: normal, early
and late. Any directory you leave out defaults to the current working
directory. Each directory must already exist. If one does not exist, the
command logs an error and exits with status 1. The parent directories of all
three are created if they are missing. Unit files are written only into the
normal directory.

```
systemd-pixi-generator /run/systemd/generator /run/systemd/generator.early /run/systemd/generator.late
```

Options:

- `--mode run` is the default. It renders the units.
- `--mode init` tries each systemd `system-generators` directory in turn and
  creates a symlink to the generator in the first one that accepts it. The link
  is named `systemd-pixi-system-generator`. It then does the same for the
  `user-generators` directories, with a link named
  `systemd-pixi-user-generator`. The directories are tried in the order
  `/run`, `/etc`, `/usr/local/lib`, `/usr/lib`.
- `-m`, `--manifest PATH` reads the manifest from PATH. If PATH cannot be read,
  the default location is used instead.
- `-t`, `--template PATH` takes the unit-file template from PATH, if PATH is a
  file. Otherwise the template is read from a path relative to the current
  directory:
  - `src/resources/system.unit.service.tera` when the privilege is system. This
    is the case when the `SYSTEMD_SCOPE` environment variable equals the name of
    the resolved executable.
  - `src/resources/user.unit.service.tera` in every other case.
- `-v`, `--verbose` turns on debug logging.

Errors that occur while reading or rendering are logged, and the command still
exits with status 0.

## Manifest format

```toml
version = 1

[envs.myservice]
channels = ["conda-forge"]
dependencies = { python = "*" }
exposed = { myservice = "myservice" }

[envs.myservice.service]
status = "enabled"
after = "network.target"
exec-start = "myservice --serve"
```

The fields `version`, `envs`, `channels`, `dependencies` and `service.status`
are required. A `version` other than the integer 1 is logged but still
processed.

## Template variables

The template is rendered with the following variables. An undefined variable
is an error.

| Variable | Value |
| --- | --- |
| `name` | the environment's name |
| `description` | the environment's name |
| `after` | always `unknown` |
| `exec_start_pre` | always `missing` |
| `exec_start` | always `missing` |

## What it does not do

- The package does not ship any unit-file template. You must supply one with
  `--template`, or place one at the `src/resources/...` path described above.
- The `after`, `exec-start-pre` and `exec-start` values from the manifest are
  parsed and logged. They are not passed to the template.

## Library use

```python
from pixi_unitgen.config import Privilege
from pixi_unitgen.run import run

written = run(normal_dir, early_dir, late_dir, Privilege.USER, "unit.tmpl", "pixi-global.toml")
```

- `run` returns the paths of the unit files it wrote.
- `pixi_unitgen.run.parse_manifest` turns manifest text into a `Manifest`. It
  raises `ManifestError` on invalid input.
- `pixi_unitgen.install.initialize(source_path, system_dirs=None, user_dirs=None)`
  installs the generator symlinks. It returns the pair of links it created,
  with `None` in place of any link that no directory accepted.