"""Tests for the preflight header check."""

import pytest

from exohunt.ingestion import parse_csv_text
from exohunt.validation import DEFAULT_REQUIRED_FIELDS, run_preflight


class TestRunPreflight:
    """Tests for run_preflight()."""

    def test_default_requires_equilibrium_temperature(self) -> None:
        """Test the default required field."""
        assert DEFAULT_REQUIRED_FIELDS == ("equilibrium_temp_K",)

    def test_passes_with_any_alias(self) -> None:
        """Test that any equilibrium temperature spelling satisfies the check."""
        for header in ("koi_teq", "pl_eqt", "Equilibrium Temperature", "TEQ"):
            result = run_preflight(["kepoi_name", header])
            assert result.passed, header

    def test_fails_without_required_field(self) -> None:
        """Test a header row lacking every equilibrium temperature alias."""
        result = run_preflight(["kepoi_name", "koi_period", "koi_score", "notes"])

        assert not result.passed
        assert result.missing_required == ["equilibrium_temp_K"]
        assert result.unmapped_headers == ["koi_score", "notes"]
        assert result.mapped_fields == frozenset({"object_id", "orbital_period_days"})

    def test_summary_lists_counts_and_unmapped(self) -> None:
        """Test the human-readable summary."""
        result = run_preflight(["kepoi_name", "koi_score", "notes"])
        summary = result.summary()
        assert "1 of 3 columns mapped" in summary
        assert "missing required: equilibrium_temp_K" in summary
        assert "Unmapped columns: koi_score, notes" in summary

    def test_custom_required_fields(self) -> None:
        """Test that required fields are a parameter."""
        headers = ["koi_teq", "koi_period"]
        assert run_preflight(headers, ["orbital_period_days"]).passed

        result = run_preflight(headers, ["equilibrium_temp_K", "disposition"])
        assert result.missing_required == ["disposition"]

    def test_no_required_fields(self) -> None:
        """Test that an empty requirement always passes."""
        assert run_preflight(["whatever"], ()).passed

    def test_unknown_required_field_raises(self) -> None:
        """Test that a typo in the requirement is caught."""
        with pytest.raises(ValueError, match="Unknown canonical field"):
            run_preflight(["koi_teq"], ["equilibrium_temp"])

    def test_duplicate_headers_reported_by_real_name(self) -> None:
        """Test that a repeated header is reported as written in the file."""
        parsed = parse_csv_text("koi_teq,koi_teq,notes\n300,301,x\n")

        result = run_preflight(parsed.headers)

        assert result.passed
        assert result.unmapped_headers == ["notes"]
        assert "koi_teq.1" not in result.summary()

    def test_header_mapping_recorded(self) -> None:
        """Test that every header appears in the mapping."""
        result = run_preflight(["koi_teq", "junk"])
        assert result.header_mapping == {
            "koi_teq": "equilibrium_temp_K",
            "junk": None,
        }
