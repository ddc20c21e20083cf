"""Deployment diff resolution.

Turns an application name and two branch names into the list of commits
that sit on the source branch but are not yet deployed:

    INIT -> CD_RESOLVED -> APP_RESOLVED -> VERSION_KNOWN
         -> COMMIT_KNOWN -> DIFF_READY -> DONE

Each step feeds the next; the first failure ends the run and is reported
together with the step it happened in. No step is retried and no later
remote call is made after a failure.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from deploy_info.core.config import DEFAULT_CD_PREFIX, DEFAULT_MANIFEST_FILE, Config
from deploy_info.core.result import Err, Ok, Result
from deploy_info.diff.manifest import VersionManifest, parse_manifest
from deploy_info.diff.tickets import TicketReference, extract_tickets
from deploy_info.gitlab.errors import DiffError
from deploy_info.gitlab.models import BranchComparison, DeploymentTag, ProjectIdentity

if TYPE_CHECKING:
    from deploy_info.gitlab.api import GitLabApi

__all__ = [
    "Step",
    "DiffFailure",
    "DiffSettings",
    "DeploymentDiff",
    "DeployDiffResolver",
    "TraceFn",
    "deployment_tag_name",
]

TraceFn = Callable[[str, object], None]


class Step(StrEnum):
    CD_PROJECT = "resolve CD project"
    APP_PROJECT = "resolve application project"
    DEPLOYED_VERSION = "fetch deployed version"
    DEPLOYED_COMMIT = "resolve deployed commit"
    COMPARE = "compare with source branch"


@dataclass(frozen=True, slots=True)
class DiffFailure:
    step: Step
    cause: DiffError

    @property
    def message(self) -> str:
        return f"{self.step}: {self.cause}"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class DiffSettings:
    cd_prefix: str = DEFAULT_CD_PREFIX
    manifest_file: str = DEFAULT_MANIFEST_FILE

    @classmethod
    def from_config(cls, config: Config) -> DiffSettings:
        return cls(cd_prefix=config.cd_prefix, manifest_file=config.manifest_file)


@dataclass(frozen=True, slots=True)
class DeploymentDiff:
    """Everything a report needs about one resolved deployment."""

    app_project: ProjectIdentity
    cd_project: ProjectIdentity
    manifest: VersionManifest
    tag: DeploymentTag
    comparison: BranchComparison
    tickets: tuple[TicketReference, ...]

    @property
    def deployed_version(self) -> str:
        return self.manifest.version


def deployment_tag_name(app_name: str, version: str) -> str:
    return f"{app_name}_v{version}"


def _fail(step: Step) -> Callable[[DiffError], DiffFailure]:
    return lambda cause: DiffFailure(step=step, cause=cause)


class DeployDiffResolver:
    """Runs the resolution pipeline against a GitLabApi.

    Args:
        api: GitLab operations (real or backed by MockHttpClient)
        settings: Naming conventions for CD project and manifest
        trace: Optional callback receiving ``(label, value)`` for each
            intermediate value; used by ``--debug``
    """

    def __init__(
        self,
        api: GitLabApi,
        settings: DiffSettings | None = None,
        trace: TraceFn | None = None,
    ) -> None:
        self._api = api
        self._settings = settings or DiffSettings()
        self._trace = trace

    def _emit(self, label: str, value: object) -> None:
        if self._trace is not None:
            self._trace(label, value)

    def manifest_path(self, app_name: str) -> str:
        return f"{app_name}/{self._settings.manifest_file}"

    def resolve(
        self,
        app_name: str,
        source_branch: str = "master",
        target_branch: str = "production",
    ) -> Result[DeploymentDiff, DiffFailure]:
        api = self._api

        cd_name = f"{self._settings.cd_prefix}{app_name}"
        cd_project = api.find_project_by_name(cd_name)
        if isinstance(cd_project, Err):
            return cd_project.map_err(_fail(Step.CD_PROJECT))
        self._emit("cdProjectId", cd_project.value.id)

        app_project = api.find_project_by_name(app_name)
        if isinstance(app_project, Err):
            return app_project.map_err(_fail(Step.APP_PROJECT))
        self._emit("appProjectId", app_project.value.id)

        path = self.manifest_path(app_name)
        raw = api.fetch_raw_file(cd_project.value.id, path, target_branch)
        if isinstance(raw, Err):
            return raw.map_err(_fail(Step.DEPLOYED_VERSION))
        manifest = parse_manifest(raw.value, source=f"{cd_name}:{target_branch}:{path}")
        if isinstance(manifest, Err):
            return manifest.map_err(_fail(Step.DEPLOYED_VERSION))
        self._emit("deployedVersion", manifest.value.version)
        if manifest.value.name is not None:
            self._emit("chartName", manifest.value.name)
        if manifest.value.app_version is not None:
            self._emit("appVersion", manifest.value.app_version)

        tag_name = deployment_tag_name(app_name, manifest.value.version)
        tag = api.first_tag(app_project.value.id, tag_name)
        if isinstance(tag, Err):
            return tag.map_err(_fail(Step.DEPLOYED_COMMIT))
        self._emit("deployedTag", tag.value.name)
        self._emit("deployedSha", tag.value.commit_short_id)

        comparison = api.compare_refs(
            app_project.value.id, tag.value.commit_short_id, source_branch
        )
        if isinstance(comparison, Err):
            return comparison.map_err(_fail(Step.COMPARE))
        self._emit("commits", len(comparison.value.commits))
        for title in comparison.value.titles:
            self._emit("commit", title)

        return Ok(
            DeploymentDiff(
                app_project=app_project.value,
                cd_project=cd_project.value,
                manifest=manifest.value,
                tag=tag.value,
                comparison=comparison.value,
                tickets=extract_tickets(comparison.value.commits),
            )
        )
