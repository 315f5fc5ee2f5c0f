"""
Tests for generate_report templating.
"""

from discord_mcp.mcp.reports import EMPTY_RANGE, build_report, format_transcript_line
from discord_mcp.models.discord_models import MessageInfo


def msg(id, author, content, timestamp):
    return MessageInfo(id=id, author=author, author_id="1", content=content, timestamp=timestamp)


class TestBuildReport:

    def test_empty_channel(self):
        report = build_report("general", "launch", [])

        assert "- **Messages Analyzed**: 0" in report
        assert f"- **Time Range**: {EMPTY_RANGE}" in report
        assert "## Messages Data\n```\n\n```" in report

    def test_chronological_transcript_and_range(self):
        newest_first = [
            msg("3", "carol", "ship it", "2024-05-03T00:00:00+00:00"),
            msg("2", "bob", "tests pass", "2024-05-02T00:00:00+00:00"),
            msg("1", "alice", "starting", "2024-05-01T00:00:00+00:00"),
        ]

        report = build_report("dev", "release readiness", newest_first)

        assert report.startswith("# Report: release readiness\n")
        assert "- **Channel**: #dev" in report
        assert "- **Time Range**: 2024-05-01T00:00:00+00:00 to 2024-05-03T00:00:00+00:00" in report
        assert "## Topic\nrelease readiness\n" in report
        assert (
            "[2024-05-01T00:00:00+00:00] alice: starting\n"
            "[2024-05-02T00:00:00+00:00] bob: tests pass\n"
            "[2024-05-03T00:00:00+00:00] carol: ship it"
        ) in report
        assert report.endswith(
            'Based on the 3 messages above, analyze the topic "release readiness" and provide insights.\n'
        )

    def test_does_not_mutate_input(self):
        messages = [msg("2", "b", "y", "t2"), msg("1", "a", "x", "t1")]
        build_report("c", "t", messages)
        assert [m.id for m in messages] == ["2", "1"]

    def test_transcript_line(self):
        assert format_transcript_line(msg("1", "dana", "hi", "ts")) == "[ts] dana: hi"
