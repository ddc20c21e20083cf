"""GitLab REST calls used by the deployment diff.

Four read-only endpoints, nothing more:
- project search (name -> id)
- raw file at a ref (CD manifest)
- tag search (version -> deployed commit)
- ref comparison (deployed commit -> source branch)

All functions take an HttpClient through GitLabApi so tests can inject
MockHttpClient.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING
from urllib.parse import quote, urlencode

from deploy_info.core.config import DEFAULT_BASE_URL
from deploy_info.core.result import Err, Ok, Result
from deploy_info.core.structured import as_obj_list
from deploy_info.gitlab.errors import DecodeError, DiffError, NotFoundError
from deploy_info.gitlab.models import BranchComparison, DeploymentTag, ProjectIdentity

if TYPE_CHECKING:
    from deploy_info.gitlab.http import HttpClient

__all__ = ["GitLabApi", "select_project"]


def _decode_json(url: str, body: bytes) -> Result[object, DecodeError]:
    try:
        data: object = json.loads(body.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return Err(DecodeError(source=url, message=f"JSON parse error: {e}"))
    return Ok(data)


def select_project(
    candidates: list[ProjectIdentity], name: str
) -> Result[ProjectIdentity, NotFoundError]:
    """Pick the candidate whose name equals ``name`` exactly.

    GitLab's ``search`` is a substring match, so ``widget`` also returns
    ``widget-ui`` and ``cd-widget``. When several candidates carry the exact
    name, the last one in response order wins.
    """
    selected: ProjectIdentity | None = None
    for candidate in candidates:
        if candidate.name == name:
            selected = candidate
    if selected is None:
        return Err(NotFoundError(kind="project", query=name))
    return Ok(selected)


class GitLabApi:
    """The four GitLab operations behind a deploy-info run.

    Args:
        http: Authenticated HTTP client
        base_url: API root such as ``https://gitlab.com/api/v4``
    """

    def __init__(self, http: HttpClient, base_url: str = DEFAULT_BASE_URL) -> None:
        self._http = http
        self.base_url = base_url.rstrip("/")

    def _url(self, path: str, query: dict[str, str]) -> str:
        return f"{self.base_url}{path}?{urlencode(query)}"

    def _get_json(self, url: str) -> Result[object, DiffError]:
        result = self._http.get(url)
        if isinstance(result, Err):
            return result
        return _decode_json(url, result.value)

    def _get_list(self, url: str) -> Result[list[object], DiffError]:
        result = self._get_json(url)
        if isinstance(result, Err):
            return result
        items = as_obj_list(result.value)
        if items is None:
            return Err(DecodeError(source=url, message="Expected JSON array"))
        return Ok(items)

    def find_project_by_name(self, name: str) -> Result[ProjectIdentity, DiffError]:
        """Resolve a project name to its identity.

        Returns:
            Ok with the exactly-named project, Err(NotFoundError) if no
            candidate matches exactly, or a transport/decode error.
        """
        url = self._url(
            "/projects",
            {"simple": "true", "membership": "true", "search": name},
        )
        listing = self._get_list(url)
        if isinstance(listing, Err):
            return listing

        candidates: list[ProjectIdentity] = []
        for item in listing.value:
            project = ProjectIdentity.from_json(item)
            if project is None:
                return Err(DecodeError(source=url, message="Malformed project record"))
            candidates.append(project)

        return select_project(candidates, name)

    def fetch_raw_file(self, project_id: int, path: str, ref: str) -> Result[bytes, DiffError]:
        """Fetch a file's raw bytes as stored on ``ref``.

        The whole path is encoded as a single segment, so ``widget/Chart.yaml``
        is requested as ``widget%2FChart.yaml``.
        """
        encoded = quote(path, safe="")
        url = self._url(f"/projects/{project_id}/repository/files/{encoded}/raw", {"ref": ref})
        result = self._http.get(url)
        if isinstance(result, Err):
            return result
        return Ok(result.value)

    def search_tags(self, project_id: int, query: str) -> Result[tuple[DeploymentTag, ...], DiffError]:
        """List tags whose name contains ``query``, in remote order."""
        url = self._url(f"/projects/{project_id}/repository/tags", {"search": query})
        listing = self._get_list(url)
        if isinstance(listing, Err):
            return listing

        tags: list[DeploymentTag] = []
        for item in listing.value:
            tag = DeploymentTag.from_json(item)
            if tag is None:
                return Err(DecodeError(source=url, message="Malformed tag record"))
            tags.append(tag)
        return Ok(tuple(tags))

    def first_tag(self, project_id: int, query: str) -> Result[DeploymentTag, DiffError]:
        """Return the first tag matching ``query``, or NotFoundError if none."""
        result = self.search_tags(project_id, query)
        if isinstance(result, Err):
            return result
        if not result.value:
            return Err(NotFoundError(kind="tag", query=query, project_id=project_id))
        return Ok(result.value[0])

    def compare_refs(
        self, project_id: int, from_ref: str, to_ref: str
    ) -> Result[BranchComparison, DiffError]:
        """Compare ``from_ref`` (exclusive) to ``to_ref`` (inclusive)."""
        url = self._url(
            f"/projects/{project_id}/repository/compare",
            {"from": from_ref, "to": to_ref},
        )
        result = self._get_json(url)
        if isinstance(result, Err):
            return result

        comparison = BranchComparison.from_json(result.value)
        if comparison is None:
            return Err(DecodeError(source=url, message="Malformed compare response"))
        return Ok(comparison)
