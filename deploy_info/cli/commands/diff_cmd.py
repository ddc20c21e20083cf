from __future__ import annotations

from pathlib import Path

import typer

from deploy_info import __version__
from deploy_info.cli.context import CLIContext, build_context
from deploy_info.core.config import mask_token
from deploy_info.core.result import Err
from deploy_info.diff.report import render_report
from deploy_info.diff.resolver import DeployDiffResolver, DiffSettings
from deploy_info.gitlab.api import GitLabApi
from deploy_info.gitlab.http import RealHttpClient
from deploy_info.output.errors import diff_failure_exit_code, print_diff_failure


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def diff(
    project: str = typer.Option(..., "-p", "--project", help="GitLab project name."),
    debug: bool = typer.Option(False, "-d", "--debug", help="Print intermediate values."),
    source: str = typer.Option("master", "--source", help="Application source branch."),
    target: str = typer.Option("production", "--target", help="Deployment target branch."),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help="Optional TOML config file.",
        dir_okay=False,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Show commits and JIRA tickets not yet deployed to the target branch."""
    ctx = build_context(config_path)
    run_diff(ctx, project=project, source=source, target=target, debug=debug)


def run_diff(ctx: CLIContext, *, project: str, source: str, target: str, debug: bool) -> None:
    console = ctx.console
    config = ctx.config

    def trace(label: str, value: object) -> None:
        console.debug(f"{label}: {value}")

    if debug:
        trace("projectName", project)
        trace("apiKey", mask_token(config.token))
        trace("appSourceBranch", source)
        trace("cdTargetBranch", target)

    http = RealHttpClient(config.token, timeout=config.timeout)
    resolver = DeployDiffResolver(
        GitLabApi(http, config.base_url),
        settings=DiffSettings.from_config(config),
        trace=trace if debug else None,
    )

    result = resolver.resolve(project, source_branch=source, target_branch=target)
    if isinstance(result, Err):
        print_diff_failure(result.error, console)
        raise typer.Exit(code=diff_failure_exit_code(result.error))

    if result.value.comparison.compare_timeout:
        console.warning("GitLab timed out comparing refs; the commit list may be incomplete")
    if result.value.comparison.compare_same_ref:
        console.hint(f"{source} is the deployed commit; nothing to deploy")

    for line in render_report(result.value, config.browse_url):
        console.print(line)
