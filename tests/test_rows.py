"""Tests for the row transformer."""

import pytest

from exohunt.normalization import transform_row, transform_rows


class TestTransformRow:
    """Tests for transform_row()."""

    def test_blank_required_value_becomes_none(self) -> None:
        """Test the koi_teq example: blank value plus injected source."""
        assert transform_row({"koi_teq": ""}) == {
            "equilibrium_temp_K": None,
            "source": "uploaded_csv",
        }

    @pytest.mark.parametrize("blank", ["", " ", "\t", "   \n"])
    def test_whitespace_only_values_become_none(self, blank: str) -> None:
        """Test that any whitespace-only string becomes None."""
        record = transform_row({"koi_period": blank})
        assert record["orbital_period_days"] is None

    def test_values_are_copied_under_canonical_names(self) -> None:
        """Test that non-blank values are kept verbatim."""
        record = transform_row({"koi_period": "9.488", "KOI Disposition": "CONFIRMED"})
        assert record["orbital_period_days"] == "9.488"
        assert record["disposition"] == "CONFIRMED"

    def test_unmapped_columns_are_dropped(self) -> None:
        """Test that unmapped headers never appear in the output."""
        record = transform_row({"koi_score": "0.9", "notes": "x", "koi_teq": "500"})
        assert "koi_score" not in record
        assert "notes" not in record
        assert set(record) == {"equilibrium_temp_K", "source"}

    def test_non_string_values_pass_through(self) -> None:
        """Test that numbers and None are not altered."""
        record = transform_row({"koi_teq": 288, "koi_prad": None})
        assert record["equilibrium_temp_K"] == 288
        assert record["planet_radius_earth"] is None

    def test_existing_source_is_not_overwritten(self) -> None:
        """Test that a source column in the CSV wins over the default."""
        record = transform_row({"mission": "TESS", "koi_teq": "300"})
        assert record["source"] == "TESS"

    def test_source_injection_can_be_disabled(self) -> None:
        """Test default_source=None."""
        record = transform_row({"koi_teq": "300"}, default_source=None)
        assert "source" not in record

    def test_first_non_null_duplicate_wins(self) -> None:
        """Test two raw columns mapping to the same canonical field."""
        record = transform_row({"koi_teq": "", "pl_eqt": "301", "teq": "999"})
        assert record["equilibrium_temp_K"] == "301"


class TestTransformRows:
    """Tests for transform_rows()."""

    def test_preserves_order(self) -> None:
        """Test that output rows follow input order."""
        rows = [{"koi_teq": str(t)} for t in (100, 200, 300)]
        records = transform_rows(rows, default_source="kepler")
        assert [r["equilibrium_temp_K"] for r in records] == ["100", "200", "300"]
        assert all(r["source"] == "kepler" for r in records)

    def test_empty_input(self) -> None:
        """Test that no rows produce no records."""
        assert transform_rows([]) == []
