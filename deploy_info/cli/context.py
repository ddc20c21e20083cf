from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from deploy_info.core.config import Config, load_config
from deploy_info.core.errors import ErrorCode
from deploy_info.core.result import Err
from deploy_info.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol


def build_context(config_path: Path | None = None) -> CLIContext:
    console = RichConsole()

    config_result = load_config(config_path)
    if isinstance(config_result, Err):
        error = config_result.error
        console.error(error.message)
        if error.hint:
            console.hint(error.hint)
        code = ErrorCode.ENV_ERROR if error.path is not None else ErrorCode.USER_ERROR
        raise typer.Exit(code=int(code))

    return CLIContext(config=config_result.value, console=console)
