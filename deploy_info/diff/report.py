"""Release-note rendering in JIRA wiki markup."""

from __future__ import annotations

from deploy_info.core.config import DEFAULT_BROWSE_URL
from deploy_info.diff.resolver import DeploymentDiff

__all__ = ["render_report", "COMMITS_HEADER", "TICKETS_HEADER", "SEPARATOR"]

COMMITS_HEADER = "*Commit Messages*"
TICKETS_HEADER = "*JIRA Tickets*"
SEPARATOR = "----------"


def render_report(diff: DeploymentDiff, browse_url: str = DEFAULT_BROWSE_URL) -> list[str]:
    """Render the diff as report lines.

    Commits and tickets both keep the order of the comparison. A ticket is
    listed once per commit that mentions it.
    """
    lines: list[str] = [COMMITS_HEADER]
    lines.extend(f"* {title}" for title in diff.comparison.titles)
    lines.append("")
    lines.append(SEPARATOR)
    lines.append("")
    lines.append(TICKETS_HEADER)
    lines.extend(f"[{t.id}|{t.url(browse_url)}]" for t in diff.tickets)
    return lines
