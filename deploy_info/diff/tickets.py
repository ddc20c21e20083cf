"""Ticket identifier extraction from commit titles."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from deploy_info.gitlab.models import Commit

__all__ = ["TicketReference", "TICKET_PATTERN", "extract_ticket", "extract_tickets"]

# Word characters, hyphen, digits: ABC-42, fix-3, DATA_OPS-7.
TICKET_PATTERN = re.compile(r"\w+-\d+", re.ASCII)


@dataclass(frozen=True, slots=True)
class TicketReference:
    id: str

    def url(self, browse_url: str) -> str:
        return f"{browse_url}{self.id}"


def extract_ticket(title: str) -> TicketReference | None:
    """Return the leftmost ticket identifier in ``title``, if any."""
    match = TICKET_PATTERN.search(title)
    if match is None:
        return None
    return TicketReference(id=match.group(0))


def extract_tickets(commits: Iterable[Commit]) -> tuple[TicketReference, ...]:
    """One reference per commit whose title carries a ticket, in commit order."""
    tickets: list[TicketReference] = []
    for commit in commits:
        ticket = extract_ticket(commit.title)
        if ticket is not None:
            tickets.append(ticket)
    return tuple(tickets)
