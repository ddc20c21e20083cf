from __future__ import annotations

import typer

from deploy_info.cli.commands.diff_cmd import diff


app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
)

# Single command: `deploy-info -p <project>`
app.command(no_args_is_help=True)(diff)


def main() -> None:
    app()
