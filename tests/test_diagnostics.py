"""Tests for catalog health checks."""

from multilan_helper.diagnostics import collect_diagnostics, summarize_checks
from multilan_helper.models import CatalogStore, Language


def by_name(checks):
    return {c.name: c for c in checks}


class TestDiagnostics:
    """Test the catalog checks and their summary."""

    def test_healthy_store(self, store):
        checks = by_name(collect_diagnostics(store))

        assert checks["Catalog"].status == "ok"
        assert checks["Language coverage"].status == "ok"
        assert checks["Duplicate wordings"].status == "ok"
        assert checks["Variables"].status == "ok"
        assert checks["Metadata"].status == "ok"
        assert checks["Metadata"].detail == "1/4 entries have metadata"

    def test_empty_store(self):
        checks = collect_diagnostics(CatalogStore(source="tra-files"))

        assert len(checks) == 1
        assert checks[0].status == "error"
        assert "tra-files" in checks[0].detail

    def test_problems_reported(self):
        store = CatalogStore.build({
            "1": {Language.EN: "OK", Language.FR: "###a###"},
            "2": {Language.EN: "OK"},
        })
        checks = by_name(collect_diagnostics(store))

        assert checks["Language coverage"].status == "warn"
        assert "1, 2" in checks["Language coverage"].detail
        assert checks["Duplicate wordings"].status == "warn"
        assert "'OK'" in checks["Duplicate wordings"].detail
        assert checks["Variables"].status == "warn"
        assert checks["Metadata"].status == "warn"

    def test_summary(self, store):
        checks = collect_diagnostics(store)
        summary = summarize_checks(checks)

        assert summary == {"ok": 5, "warn": 0, "error": 0}
        assert sum(summary.values()) == len(checks)
