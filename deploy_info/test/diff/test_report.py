"""Tests for diff/report.py - release-note rendering."""

from __future__ import annotations

from deploy_info.diff.manifest import VersionManifest
from deploy_info.diff.report import render_report
from deploy_info.diff.resolver import DeploymentDiff
from deploy_info.diff.tickets import extract_tickets
from deploy_info.gitlab.models import BranchComparison, Commit, DeploymentTag, ProjectIdentity

BROWSE = "https://jira.example/browse/"


def _diff(*titles: str) -> DeploymentDiff:
    commits = tuple(Commit(id=str(i), short_id=str(i), title=t) for i, t in enumerate(titles))
    return DeploymentDiff(
        app_project=ProjectIdentity(name="widget", id=101),
        cd_project=ProjectIdentity(name="cd-widget", id=202),
        manifest=VersionManifest(version="4.0.1"),
        tag=DeploymentTag(name="widget_v4.0.1", commit_short_id="abc123d"),
        comparison=BranchComparison(commits=commits),
        tickets=extract_tickets(commits),
    )


class TestRenderReport:
    def test_widget_report(self) -> None:
        lines = render_report(_diff("ABC-42: fix login bug", "chore: bump deps"), BROWSE)

        assert lines == [
            "*Commit Messages*",
            "* ABC-42: fix login bug",
            "* chore: bump deps",
            "",
            "----------",
            "",
            "*JIRA Tickets*",
            "[ABC-42|https://jira.example/browse/ABC-42]",
        ]

    def test_order_preserved_in_both_sections(self) -> None:
        lines = render_report(_diff("ZZZ-9 z", "plain", "AAA-1 a", "MMM-5 m"), BROWSE)

        bullets = [line for line in lines if line.startswith("* ")]
        links = [line for line in lines if line.startswith("[")]
        assert bullets == ["* ZZZ-9 z", "* plain", "* AAA-1 a", "* MMM-5 m"]
        assert links == [
            "[ZZZ-9|https://jira.example/browse/ZZZ-9]",
            "[AAA-1|https://jira.example/browse/AAA-1]",
            "[MMM-5|https://jira.example/browse/MMM-5]",
        ]

    def test_no_commits(self) -> None:
        assert render_report(_diff(), BROWSE) == [
            "*Commit Messages*",
            "",
            "----------",
            "",
            "*JIRA Tickets*",
        ]

    def test_default_browse_url(self) -> None:
        lines = render_report(_diff("ABC-1 x"))
        assert lines[-1] == "[ABC-1|https://mediciventures.atlassian.net/browse/ABC-1]"
