"""Tests for diff/tickets.py - ticket identifier extraction."""

import pytest

from deploy_info.diff.tickets import TicketReference, extract_ticket, extract_tickets
from deploy_info.gitlab.models import Commit


class TestExtractTicket:
    @pytest.mark.parametrize(
        ("title", "expected"),
        [
            ("ABC-42: fix login bug", "ABC-42"),
            ("Merge branch 'feature/OPS-7-retry' into master", "OPS-7"),
            ("fix-3 typo in readme", "fix-3"),
            ("DATA_OPS-100 nightly export", "DATA_OPS-100"),
            ("[WEB-9] header color", "WEB-9"),
        ],
    )
    def test_matches(self, title: str, expected: str) -> None:
        assert extract_ticket(title) == TicketReference(id=expected)

    @pytest.mark.parametrize(
        "title",
        [
            "chore: bump deps",
            "",
            "handle the - case",
            "ABC- 42 spaced out",
            "-42 leading hyphen only",
            "ABC-",
        ],
    )
    def test_no_match(self, title: str) -> None:
        assert extract_ticket(title) is None

    def test_first_match_only(self) -> None:
        assert extract_ticket("ABC-1 and XYZ-2") == TicketReference(id="ABC-1")

    def test_leftmost_match(self) -> None:
        assert extract_ticket("revert XYZ-2 (was ABC-1)") == TicketReference(id="XYZ-2")

    def test_ascii_word_characters(self) -> None:
        assert extract_ticket("Ünicode-5") == TicketReference(id="nicode-5")

    def test_deterministic(self) -> None:
        title = "ABC-42: fix login bug"
        first = extract_ticket(title)
        assert first is not None
        assert extract_ticket(title) == first
        assert extract_ticket(first.id) == first


class TestExtractTickets:
    def test_keeps_commit_order_and_skips_non_matching(self) -> None:
        commits = [
            Commit(id="1", short_id="1", title="ZZZ-9 last alphabetically"),
            Commit(id="2", short_id="2", title="chore: bump deps"),
            Commit(id="3", short_id="3", title="AAA-1 first alphabetically"),
        ]
        assert extract_tickets(commits) == (
            TicketReference(id="ZZZ-9"),
            TicketReference(id="AAA-1"),
        )

    def test_duplicate_tickets_are_kept(self) -> None:
        commits = [
            Commit(id="1", short_id="1", title="ABC-1 part one"),
            Commit(id="2", short_id="2", title="ABC-1 part two"),
        ]
        assert len(extract_tickets(commits)) == 2


class TestTicketReference:
    def test_url(self) -> None:
        ref = TicketReference(id="ABC-42")
        assert ref.url("https://jira.example/browse/") == "https://jira.example/browse/ABC-42"
