"""Chart.yaml manifest parsing.

The CD project records the deployed version in a Helm-style ``Chart.yaml``.
Only ``version`` matters to the pipeline; ``name`` and ``appVersion`` are kept
for the debug trace and every other field is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass

import yaml

from deploy_info.core.result import Err, Ok, Result
from deploy_info.gitlab.errors import DecodeError

__all__ = ["VersionManifest", "parse_manifest"]

_NULL_TAG = "tag:yaml.org,2002:null"


@dataclass(frozen=True, slots=True)
class VersionManifest:
    version: str
    name: str | None = None
    app_version: str | None = None


def _scalar(node: yaml.Node | None) -> str | None:
    if not isinstance(node, yaml.ScalarNode) or node.tag == _NULL_TAG:
        return None
    return node.value


def _top_level(root: yaml.MappingNode) -> dict[str, yaml.Node]:
    fields: dict[str, yaml.Node] = {}
    for key, value in root.value:
        if isinstance(key, yaml.ScalarNode):
            fields[key.value] = value
    return fields


def parse_manifest(raw: bytes, source: str = "Chart.yaml") -> Result[VersionManifest, DecodeError]:
    """Decode a manifest document and extract its version.

    Scalars are read from the composed node tree as written, so
    ``version: 1.10`` reads as ``"1.10"`` rather than the float ``1.1``. A
    missing or null ``version`` (``~``, ``null``, nothing) yields an empty
    string; a quoted ``"null"`` is kept as text.

    Args:
        raw: Document bytes as fetched from the repository
        source: Name used in error messages

    Returns:
        Ok(VersionManifest), or Err(DecodeError) for undecodable input
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        return Err(DecodeError(source=source, message=f"not UTF-8: {e}"))

    try:
        root = yaml.compose(text, Loader=yaml.SafeLoader)
    except yaml.YAMLError as e:
        return Err(DecodeError(source=source, message=f"invalid YAML: {e}"))

    if root is None or (isinstance(root, yaml.ScalarNode) and root.tag == _NULL_TAG):
        return Ok(VersionManifest(version=""))

    if not isinstance(root, yaml.MappingNode):
        return Err(DecodeError(source=source, message="manifest root must be a mapping"))

    fields = _top_level(root)
    return Ok(
        VersionManifest(
            version=_scalar(fields.get("version")) or "",
            name=_scalar(fields.get("name")),
            app_version=_scalar(fields.get("appVersion")),
        )
    )
