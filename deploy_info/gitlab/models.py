"""Typed views of the GitLab payloads the pipeline reads.

Only the fields the pipeline uses are modelled; everything else in a
response is ignored. ``from_json`` returns None when a record does not have
the expected shape so callers can turn that into a DecodeError.
"""

from __future__ import annotations

from dataclasses import dataclass

from deploy_info.core.structured import as_obj_list, as_str_dict, get_bool, get_int, get_table

__all__ = [
    "ProjectIdentity",
    "DeploymentTag",
    "Commit",
    "BranchComparison",
]


@dataclass(frozen=True, slots=True)
class ProjectIdentity:
    name: str
    id: int

    @classmethod
    def from_json(cls, obj: object) -> ProjectIdentity | None:
        data = as_str_dict(obj)
        if data is None:
            return None
        name = data.get("name")
        project_id = get_int(data, "id")
        if not isinstance(name, str) or project_id is None:
            return None
        return cls(name=name, id=project_id)


@dataclass(frozen=True, slots=True)
class DeploymentTag:
    """A tag marking a deployed version, with the commit it points at."""

    name: str
    commit_short_id: str

    @classmethod
    def from_json(cls, obj: object) -> DeploymentTag | None:
        data = as_str_dict(obj)
        if data is None:
            return None
        name = data.get("name")
        commit = get_table(data, "commit")
        if not isinstance(name, str) or commit is None:
            return None
        short_id = commit.get("short_id")
        if not isinstance(short_id, str) or not short_id:
            return None
        return cls(name=name, commit_short_id=short_id)


@dataclass(frozen=True, slots=True)
class Commit:
    id: str
    short_id: str
    title: str

    @classmethod
    def from_json(cls, obj: object) -> Commit | None:
        data = as_str_dict(obj)
        if data is None:
            return None
        title = data.get("title")
        if not isinstance(title, str):
            return None
        commit_id = data.get("id")
        short_id = data.get("short_id")
        return cls(
            id=commit_id if isinstance(commit_id, str) else "",
            short_id=short_id if isinstance(short_id, str) else "",
            title=title,
        )


@dataclass(frozen=True, slots=True)
class BranchComparison:
    """Result of comparing two refs.

    Attributes:
        commits: Commits in the order the remote returned them
        compare_timeout: Remote gave up computing the full diff
        compare_same_ref: Both refs resolve to the same commit
    """

    commits: tuple[Commit, ...]
    compare_timeout: bool = False
    compare_same_ref: bool = False

    @property
    def titles(self) -> list[str]:
        return [c.title for c in self.commits]

    @classmethod
    def from_json(cls, obj: object) -> BranchComparison | None:
        data = as_str_dict(obj)
        if data is None:
            return None

        raw_commits = data.get("commits", [])
        items = as_obj_list(raw_commits)
        if items is None:
            return None

        commits: list[Commit] = []
        for item in items:
            commit = Commit.from_json(item)
            if commit is None:
                return None
            commits.append(commit)

        return cls(
            commits=tuple(commits),
            compare_timeout=get_bool(data, "compare_timeout"),
            compare_same_ref=get_bool(data, "compare_same_ref"),
        )
