"""
Tests for remote/local reconciliation (sdk_catalog/reconcile.py).
"""

import pytest

from sdk_catalog.models import (
    CandidateRecord,
    JavaVersion,
    LocalScanResult,
    LocalVersionMap,
    SimpleVersion,
)
from sdk_catalog.reconcile import (
    flag_version,
    local_only_candidates,
    reconcile,
    reconcile_all,
)


@pytest.fixture
def gradle():
    return CandidateRecord(
        display_name="Gradle",
        binary_id="gradle",
        homepage="https://gradle.org/",
        default_version="(8.5)",
    )


@pytest.fixture
def gradle_versions():
    return [SimpleVersion("8.5"), SimpleVersion("8.4"), SimpleVersion("7.6")]


class TestFlagVersion:
    """Tests for flagging a single entry."""

    def test_installed_and_current(self):
        local_map = LocalVersionMap("gradle", {"8.5": True})
        flagged = flag_version(SimpleVersion("8.5"), local_map)
        assert flagged.installed is True
        assert flagged.current is True

    def test_installed_not_current(self):
        local_map = LocalVersionMap("gradle", {"8.4": False})
        flagged = flag_version(SimpleVersion("8.4"), local_map)
        assert (flagged.installed, flagged.current) == (True, False)

    def test_java_matches_on_identifier(self):
        """Test Java rows are looked up by identifier, not display version."""
        local_map = LocalVersionMap("java", {"17.0.2-tem": True})
        row = JavaVersion(vendor="Temurin", version="17.0.2", distribution="tem",
                          identifier="17.0.2-tem")
        flagged = flag_version(row, local_map)
        assert flagged.installed is True
        assert flagged.current is True
        assert flagged.vendor == "Temurin"

    def test_stale_flags_cleared(self):
        """Test flags carried in from elsewhere are reset when not installed."""
        flagged = flag_version(SimpleVersion("1.0", installed=True, current=True), None)
        assert (flagged.installed, flagged.current) == (False, False)


class TestReconcile:
    """Tests for merging one candidate."""

    def test_no_local_map(self, gradle, gradle_versions):
        """Test a missing local map leaves every flag unset."""
        unified = reconcile(gradle, gradle_versions, None)
        assert all(not v.installed and not v.current for v in unified.versions)
        assert unified.installed is False
        assert unified.current_version is None

    def test_empty_local_map(self, gradle, gradle_versions):
        unified = reconcile(gradle, gradle_versions, LocalVersionMap("gradle", {}))
        assert all(not v.installed and not v.current for v in unified.versions)
        assert unified.installed is False

    def test_flags_follow_local_map(self, gradle, gradle_versions):
        local_map = LocalVersionMap("gradle", {"8.4": True, "7.6": False})
        unified = reconcile(gradle, gradle_versions, local_map)

        flags = {v.value: (v.installed, v.current) for v in unified.versions}
        assert flags == {"8.5": (False, False), "8.4": (True, True), "7.6": (True, False)}
        assert unified.installed is True
        assert unified.current_version == "8.4"
        assert unified.installed_versions == ["8.4", "7.6"]

    def test_order_preserved(self, gradle):
        """Test the output keeps the given order rather than re-sorting."""
        versions = [SimpleVersion("1.0"), SimpleVersion("3.0"), SimpleVersion("2.0")]
        unified = reconcile(gradle, versions, LocalVersionMap("gradle", {"3.0": True}))
        assert [v.value for v in unified.versions] == ["1.0", "3.0", "2.0"]

    def test_inputs_not_mutated(self, gradle, gradle_versions):
        local_map = LocalVersionMap("gradle", {"8.5": True})
        before = list(gradle_versions)
        reconcile(gradle, gradle_versions, local_map)
        assert gradle_versions == before
        assert gradle_versions[0].installed is False
        assert local_map.versions == {"8.5": True}

    def test_local_versions_missing_from_listing(self, gradle, gradle_versions):
        """Test local-only versions are kept on the unified record."""
        local_map = LocalVersionMap("gradle", {"6.0-custom": True})
        unified = reconcile(gradle, gradle_versions, local_map)
        assert not any(v.installed for v in unified.versions)
        assert unified.installed_versions == ["6.0-custom"]
        assert unified.current_version == "6.0-custom"

    def test_upgrade_available(self, gradle):
        unified = reconcile(gradle, (), LocalVersionMap("gradle", {"8.4": True}))
        assert unified.upgrade_available is True

        unified = reconcile(gradle, (), LocalVersionMap("gradle", {"8.5": True}))
        assert unified.upgrade_available is False

    def test_no_upgrade_without_default(self):
        record = CandidateRecord(binary_id="x", default_version="(unknown)")
        unified = reconcile(record, (), LocalVersionMap("x", {"1.0": True}))
        assert unified.upgrade_available is False


class TestReconcileAll:
    """Tests for merging the whole catalog."""

    def test_matches_by_binary_id(self, gradle):
        java = CandidateRecord(display_name="Java", binary_id="java", default_version="(21.0.1-tem)")
        scan = LocalScanResult(
            root="/tmp/candidates",
            candidates=(LocalVersionMap("java", {"17.0.2-tem": True}),),
        )

        unified = reconcile_all([gradle, java], scan)

        assert [u.binary_id for u in unified] == ["gradle", "java"]
        assert unified[0].installed is False
        assert unified[1].current_version == "17.0.2-tem"
        assert unified[1].upgrade_available is True
        assert unified[1].versions == ()

    def test_without_local_scan(self, gradle):
        unified = reconcile_all([gradle], None)
        assert unified[0].installed is False

    def test_record_without_id_never_matches(self):
        scan = LocalScanResult(root="/x", candidates=(LocalVersionMap("", {"1": True}),))
        unified = reconcile_all([CandidateRecord(display_name="Nameless")], scan)
        assert unified[0].installed is False


class TestLocalOnlyCandidates:
    def test_unknown_local_candidates(self, gradle):
        scan = LocalScanResult(
            root="/x",
            candidates=(
                LocalVersionMap("gradle", {"8.5": True}),
                LocalVersionMap("homegrown", {"0.1": False}),
            ),
        )
        assert [m.binary_id for m in local_only_candidates([gradle], scan)] == ["homegrown"]
