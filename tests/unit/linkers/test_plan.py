"""Unit tests for plan transcript parsing."""

from amu.linkers.plan import parse_plan
from amu.links.models import LinkAction, LinkOperation


class TestParsePlan:
    """Tests for parse_plan function."""

    def test_link_and_unlink_in_order(self) -> None:
        """One LINK and one UNLINK line yield two operations in order."""
        transcript = "LINK: a.txt => ../src/a.txt\nUNLINK: b.txt\n"

        assert parse_plan(transcript) == [
            LinkOperation(LinkAction.LINK, "a.txt", "../src/a.txt"),
            LinkOperation(LinkAction.UNLINK, "b.txt"),
        ]

    def test_skip_lines(self, mock_stow_plan: str) -> None:
        """Skipping lines become SKIP operations; other lines are ignored."""
        operations = parse_plan(mock_stow_plan)

        assert [op.action for op in operations] == [
            LinkAction.LINK,
            LinkAction.UNLINK,
            LinkAction.SKIP,
        ]
        assert operations[2].path == "nvim/init.lua"
        assert operations[2].detail == "../../dotfiles/config/nvim/init.lua"

    def test_annotations_are_stripped(self) -> None:
        """Trailing stow annotations are not part of the path."""
        transcript = (
            "UNLINK: a.txt (reverts previous action)\n"
            "LINK: a.txt => ../src/a.txt (reverts previous action)\n"
        )

        operations = parse_plan(transcript)

        assert [op.path for op in operations] == ["a.txt", "a.txt"]
        assert operations[1].detail == "../src/a.txt"

    def test_conflict_reason_form(self, mock_stow_conflict: str) -> None:
        """Conflicts name the path after the last colon."""
        operations = parse_plan(mock_stow_conflict)

        assert len(operations) == 1
        assert operations[0].action == LinkAction.CONFLICT
        assert operations[0].path == "a.txt"
        assert operations[0].detail == "existing target is neither a link nor a directory: a.txt"

    def test_conflict_over_existing_form(self) -> None:
        """Older stow conflict wording is understood too."""
        transcript = (
            "  * cannot stow ../src/a.txt over existing target a.txt "
            "since neither a link nor a directory and --adopt not specified\n"
        )

        operations = parse_plan(transcript)

        assert operations[0].path == "a.txt"

    def test_conflict_foreign_link_form(self) -> None:
        """Foreign link conflicts drop the link destination."""
        transcript = "  * existing target is not owned by stow: a.txt => /elsewhere/a.txt\n"

        assert parse_plan(transcript)[0].path == "a.txt"

    def test_unrecognized_lines_ignored(self) -> None:
        """Headers, MKDIR lines and summaries produce no operations."""
        transcript = (
            "Planning stow of package config...\n"
            "MKDIR: nvim\n"
            "WARNING: in simulation mode so not modifying filesystem.\n"
        )

        assert parse_plan(transcript) == []

    def test_empty_transcript(self) -> None:
        """An empty transcript has no operations."""
        assert parse_plan("") == []
