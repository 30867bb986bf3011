[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pixi-unitgen"
version = "0.1.0"
description = "A systemd generator that writes service units for pixi global environments"
requires-python = ">=3.11"
dependencies = [
    "jinja2",
]
keywords = ["systemd", "generator", "pixi", "unit", "service"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Boot :: Init",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
systemd-pixi-generator = "pixi_unitgen.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pixi_unitgen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
