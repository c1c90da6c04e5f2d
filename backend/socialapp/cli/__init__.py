"""``flask`` sub-commands shipped with the application."""

from __future__ import annotations

from flask import Flask

from .seed import seed_cli

COMMANDS = (seed_cli,)


def init_app(app: Flask) -> None:
    for command in COMMANDS:
        app.cli.add_command(command)
