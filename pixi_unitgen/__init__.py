"""Generate systemd service units from a pixi global manifest."""

__version__ = "0.1.0"