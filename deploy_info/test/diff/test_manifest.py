"""Tests for diff/manifest.py - Chart.yaml parsing."""

from deploy_info.core.result import Err, Ok
from deploy_info.diff.manifest import VersionManifest, parse_manifest
from deploy_info.gitlab.errors import DecodeError
from deploy_info.test._gitlab import WIDGET_CHART


class TestParseManifest:
    def test_version_among_other_fields(self) -> None:
        raw = b'apiVersion: v1\ndescription: thing\nversion: "1.2.3"\nicon: x.png\n'
        result = parse_manifest(raw)

        assert isinstance(result, Ok)
        assert result.value.version == "1.2.3"

    def test_full_chart(self) -> None:
        result = parse_manifest(WIDGET_CHART)

        assert result == Ok(VersionManifest(version="4.0.1", name="widget", app_version="2024.06"))

    def test_unquoted_version_stays_verbatim(self) -> None:
        result = parse_manifest(b"version: 1.10\n")

        assert isinstance(result, Ok)
        assert result.value.version == "1.10"

    def test_missing_version_is_empty(self) -> None:
        result = parse_manifest(b"name: widget\nappVersion: 3\n")

        assert isinstance(result, Ok)
        assert result.value.version == ""

    def test_null_version_is_empty(self) -> None:
        for raw in (b"version: null\n", b"version: ~\n", b"version:\nname: widget\n"):
            result = parse_manifest(raw)

            assert isinstance(result, Ok)
            assert result.value.version == ""

    def test_quoted_null_is_text(self) -> None:
        result = parse_manifest(b'version: "null"\n')

        assert isinstance(result, Ok)
        assert result.value.version == "null"

    def test_null_name_is_absent(self) -> None:
        assert parse_manifest(b"version: 1.0.0\nname: ~\n") == Ok(VersionManifest(version="1.0.0"))

    def test_empty_document(self) -> None:
        assert parse_manifest(b"") == Ok(VersionManifest(version=""))

    def test_nested_version_is_not_used(self) -> None:
        result = parse_manifest(b"version:\n  major: 1\n")

        assert isinstance(result, Ok)
        assert result.value.version == ""

    def test_invalid_yaml(self) -> None:
        result = parse_manifest(b"version: [1.0\nname: x\n", source="cd-widget:Chart.yaml")

        assert isinstance(result, Err)
        assert isinstance(result.error, DecodeError)
        assert result.error.source == "cd-widget:Chart.yaml"
        assert "invalid YAML" in result.error.message

    def test_non_mapping_root(self) -> None:
        result = parse_manifest(b"- 1.0.0\n- 1.1.0\n")

        assert isinstance(result, Err)
        assert "mapping" in result.error.message

    def test_not_utf8(self) -> None:
        result = parse_manifest(b"version: \xff\xfe\n")

        assert isinstance(result, Err)
        assert "UTF-8" in result.error.message
