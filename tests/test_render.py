"""
Tests for text rendering (sdk_catalog/render.py).
"""

import pytest

from sdk_catalog import render
from sdk_catalog.models import (
    CandidateRecord,
    JavaVersion,
    LocalScanResult,
    LocalVersionMap,
    ScanFailure,
    SimpleVersion,
    UnifiedCandidate,
)
from sdk_catalog.render import (
    display_width,
    format_table,
    render_candidates,
    render_local,
    render_versions,
)


@pytest.fixture(autouse=True)
def no_color(monkeypatch):
    monkeypatch.setattr(render, "USE_COLOR", False)


class TestDisplayWidth:
    def test_ascii(self):
        assert display_width("gradle") == 6

    def test_wide_characters(self):
        """Test CJK characters take two columns."""
        assert display_width("日本") == 4

    def test_ansi_ignored(self):
        assert display_width("\033[32m8.5\033[0m") == 3

    def test_non_printable_falls_back_to_length(self):
        assert display_width("a\x01") == 2


class TestFormatTable:
    def test_alignment_with_header(self):
        lines = format_table([["java", "Java"], ["activemq", "ActiveMQ"]], ["Id", "Name"])
        assert lines == [
            "Id        Name",
            "--------  --------",
            "java      Java",
            "activemq  ActiveMQ",
        ]

    def test_ragged_rows(self):
        assert format_table([["a"], ["bb", "c"]]) == ["a", "bb  c"]

    def test_empty(self):
        assert format_table([]) == []


class TestRenderVersions:
    """Tests for the version list view."""

    def test_generic_markers(self):
        unified = UnifiedCandidate(
            candidate=CandidateRecord(binary_id="gradle"),
            versions=(
                SimpleVersion("8.5", installed=True, current=True),
                SimpleVersion("8.4", installed=True),
                SimpleVersion("7.6"),
            ),
        )
        lines = render_versions(unified).splitlines()
        assert lines[0] == ">  *  8.5"
        assert lines[1] == "   *  8.4"
        assert lines[2] == "      7.6"
        assert lines[-2:] == ["* - installed", "> - currently in use"]

    def test_java_table(self):
        unified = UnifiedCandidate(
            candidate=CandidateRecord(binary_id="java"),
            versions=(
                JavaVersion("Temurin", "21.0.1", "tem", "21.0.1-tem"),
                JavaVersion("", "17.0.2", "tem", "17.0.2-tem", installed=True, current=True),
            ),
        )
        lines = render_versions(unified).splitlines()
        assert lines[0].split() == ["Vendor", "Use", "Version", "Dist", "Status", "Identifier"]
        assert lines[2].split() == ["Temurin", "21.0.1", "tem", "21.0.1-tem"]
        assert lines[3].split() == [">>>", "17.0.2", "tem", "installed", "17.0.2-tem"]

    def test_no_versions(self):
        unified = UnifiedCandidate(candidate=CandidateRecord(binary_id="x"))
        assert render_versions(unified) == "No versions available for x"


class TestRenderCandidates:
    def test_local_state_column(self):
        candidates = [
            UnifiedCandidate(
                candidate=CandidateRecord("Gradle", "gradle", "", "https://gradle.org/", "(8.5)"),
                local_versions=("8.4",),
                local_current="8.4",
            ),
            UnifiedCandidate(
                candidate=CandidateRecord("Maven", "maven", "", "https://maven.apache.org/", "(3.9.6)"),
                local_versions=("3.9.6", "3.8.1"),
            ),
            UnifiedCandidate(candidate=CandidateRecord("Ant", "ant", "", "https://ant.apache.org/", "(1.10.14)")),
        ]
        output = render_candidates(candidates)
        assert "8.4 (upgrade available)" in output
        assert "2 installed" in output
        lines = output.splitlines()
        assert lines[0].split() == ["Candidate", "Name", "Default", "Local", "Homepage"]
        assert lines[-1].split() == ["ant", "Ant", "(1.10.14)", "https://ant.apache.org/"]


class TestRenderLocal:
    def test_versions_and_failures(self):
        scan = LocalScanResult(
            root="/sdk/candidates",
            candidates=(LocalVersionMap("java", {"17.0.2-tem": True, "21.0.1-tem": False}),),
            failures=(ScanFailure("broken", "/sdk/candidates/broken", "Permission denied"),),
        )
        lines = render_local(scan).splitlines()
        assert lines[2].split() == ["java", ">", "17.0.2-tem"]
        assert lines[3].split() == ["java", "21.0.1-tem"]
        assert lines[-1] == "✗ broken: Permission denied"

    def test_nothing_installed(self):
        assert render_local(LocalScanResult(root="/sdk")) == "No candidates installed in /sdk"
