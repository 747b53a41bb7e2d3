# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the WMM coefficient table (coefficients.py)."""
import logging
from datetime import date, datetime, timezone

import pytest

from magfield.domain.coefficients import (
    CoefficientSet,
    load_coefficients,
    parse_coefficients,
)
from magfield.domain.errors import (
    AdvisoryKind,
    DegreeOutOfRange,
    HeaderFieldInvalid,
    MagfieldError,
    MalformedCoefficientFile,
)


_SMALL_COF = """\
    2015.0            TEST-2015        01/01/2015
  1  0  -29438.5       0.0       10.7        0.0
  1  1   -1501.1    4796.2       17.9      -26.8
  2  2    1676.6    -642.0        2.4      -13.3
999999999999999999999999999999999999999999999999
999999999999999999999999999999999999999999999999
"""


@pytest.fixture(scope="module")
def wmm2015():
    return load_coefficients()


# ── Loading ─────────────────────────────────────────────────────────


class TestLoadCoefficients:

    def test_bundled_header(self, wmm2015):
        assert wmm2015.name == "WMM-2015"
        assert wmm2015.epoch == 2015.0
        assert wmm2015.valid_from == date(2014, 12, 15)
        assert wmm2015.max_degree == 12
        assert wmm2015.valid_until == 2020.0

    def test_bundled_table_shape(self, wmm2015):
        for table in (wmm2015.g, wmm2015.h, wmm2015.dg, wmm2015.dh):
            assert table.shape == (13, 13)

    @pytest.mark.parametrize("n, m, g, h, dg, dh", [
        (1, 0, -29438.5, 0.0, 10.7, 0.0),
        (2, 2, 1676.6, -642.0, 2.4, -13.3),
        (5, 1, 360.1, 47.4, 0.1, 0.4),
        (5, 4, -157.4, 16.1, 1.3, 3.3),
        (12, 0, -2.0, 0.0, 0.1, 0.0),
        (12, 6, 0.1, 0.7, 0.1, 0.0),
        (12, 11, -0.9, -0.2, 0.0, 0.0),
    ])
    def test_values_at_epoch_are_exact(self, wmm2015, n, m, g, h, dg, dh):
        lookup = wmm2015.coefficients_at(n, m, wmm2015.epoch)
        assert lookup.g == g
        assert lookup.h == h
        assert lookup.dg == dg
        assert lookup.dh == dh
        assert lookup.advisory is None

    def test_every_entry_exact_at_epoch(self, wmm2015):
        for n in range(1, 13):
            for m in range(n + 1):
                lookup = wmm2015.coefficients_at(n, m, 2015.0)
                assert lookup.g == float(wmm2015.g[n, m])
                assert lookup.h == float(wmm2015.h[n, m])

    def test_load_from_path(self, tmp_path):
        path = tmp_path / "small.COF"
        path.write_text(_SMALL_COF, encoding="utf-8")
        coefficients = load_coefficients(path)
        assert coefficients.name == "TEST-2015"
        assert coefficients.g[2, 2] == 1676.6

    def test_load_logs_at_info(self, caplog):
        caplog.set_level(logging.INFO, logger="magfield.domain.coefficients")
        load_coefficients()
        assert any("WMM-2015" in r.getMessage() for r in caplog.records)

    def test_missing_file_raises_oserror(self, tmp_path):
        with pytest.raises(OSError):
            load_coefficients(tmp_path / "nope.COF")


# ── Time dependence ─────────────────────────────────────────────────


class TestCoefficientsAt:

    def test_linear_in_time(self, wmm2015):
        lookup = wmm2015.coefficients_at(1, 0, 2017.5)
        assert lookup.g == pytest.approx(-29411.75, abs=1e-9)

    @pytest.mark.parametrize("n, m, g, h", [
        (1, 1, -1456.35, 4729.2),
        (2, 0, -2466.8, 0.0),
        (2, 1, 3004.25, -2913.35),
        (2, 2, 1682.6, -675.25),
    ])
    def test_worked_example_coefficients(self, wmm2015, n, m, g, h):
        lookup = wmm2015.coefficients_at(n, m, 2017.5)
        assert lookup.g == pytest.approx(g, abs=1e-9)
        assert lookup.h == pytest.approx(h, abs=1e-9)

    def test_accepts_datetime(self, wmm2015):
        lookup = wmm2015.coefficients_at(1, 0, datetime(2016, 1, 1, tzinfo=timezone.utc))
        assert lookup.g == pytest.approx(-29438.5 + 10.7, abs=1e-9)

    def test_degree_out_of_range(self, wmm2015):
        with pytest.raises(DegreeOutOfRange):
            wmm2015.coefficients_at(13, 0, 2015.0)
        with pytest.raises(DegreeOutOfRange):
            wmm2015.coefficients_at(3, 4, 2015.0)
        with pytest.raises(DegreeOutOfRange):
            wmm2015.coefficients_at(-1, 0, 2015.0)

    def test_degree_error_is_value_error(self, wmm2015):
        with pytest.raises(ValueError):
            wmm2015.coefficients_at(2, -1, 2015.0)

    def test_stale_advisory_after_window(self, wmm2015):
        lookup = wmm2015.coefficients_at(1, 0, 2021.0)
        assert lookup.advisory is not None
        assert lookup.advisory.kind is AdvisoryKind.STALE_MODEL
        # Value is still extrapolated
        assert lookup.g == pytest.approx(-29438.5 + 6.0 * 10.7, abs=1e-9)

    def test_stale_advisory_before_valid_date(self, wmm2015):
        assert wmm2015.validity_advisory(2014.5).kind is AdvisoryKind.STALE_MODEL

    def test_window_edges_are_valid(self, wmm2015):
        assert wmm2015.validity_advisory(2020.0) is None
        assert wmm2015.validity_advisory(date(2014, 12, 15)) is None
        assert wmm2015.validity_advisory(2017.5) is None


# ── Parsing ─────────────────────────────────────────────────────────


class TestParseCoefficients:

    def test_small_file(self):
        coefficients = parse_coefficients(_SMALL_COF)
        assert isinstance(coefficients, CoefficientSet)
        assert coefficients.h[1, 1] == 4796.2
        # Rows not in the file stay zero
        assert coefficients.g[7, 3] == 0.0

    def test_leading_blank_lines_skipped(self):
        coefficients = parse_coefficients("\n\n" + _SMALL_COF)
        assert coefficients.epoch == 2015.0

    def test_tables_read_only(self):
        coefficients = parse_coefficients(_SMALL_COF)
        with pytest.raises(ValueError):
            coefficients.g[1, 0] = 0.0

    def test_empty_text(self):
        with pytest.raises(MalformedCoefficientFile, match="no header"):
            parse_coefficients("")

    def test_header_only(self):
        with pytest.raises(MalformedCoefficientFile, match="no coefficient rows"):
            parse_coefficients("2015.0 WMM-2015 12/15/2014\n")

    def test_short_header(self):
        with pytest.raises(MalformedCoefficientFile):
            parse_coefficients("2015.0 WMM-2015\n  1  0  1.0  0.0  0.0  0.0\n")

    def test_bad_epoch(self):
        with pytest.raises(HeaderFieldInvalid, match="epoch"):
            parse_coefficients("20x5.0 WMM-2015 12/15/2014\n  1  0  1.0  0.0  0.0  0.0\n")

    def test_bad_valid_date(self):
        with pytest.raises(HeaderFieldInvalid, match="MM/DD/YYYY"):
            parse_coefficients("2015.0 WMM-2015 2014-12-15\n  1  0  1.0  0.0  0.0  0.0\n")

    def test_bad_row_reports_line(self):
        text = "2015.0 WMM-2015 12/15/2014\n  1  0  1.0  0.0  0.0  0.0\n  1  1  abc  0.0  0.0  0.0\n"
        with pytest.raises(MalformedCoefficientFile) as exc_info:
            parse_coefficients(text, source="broken.COF")
        assert exc_info.value.line_number == 3
        assert "broken.COF:3" in str(exc_info.value)

    @pytest.mark.parametrize("row", [
        " 13  0  1.0  0.0  0.0  0.0",
        "  0  0  1.0  0.0  0.0  0.0",
        "  2  3  1.0  0.0  0.0  0.0",
    ])
    def test_index_outside_triangle(self, row):
        with pytest.raises(MalformedCoefficientFile):
            parse_coefficients(f"2015.0 WMM-2015 12/15/2014\n{row}\n")

    def test_errors_share_base(self):
        with pytest.raises(MagfieldError):
            parse_coefficients("")
        with pytest.raises(ValueError):
            parse_coefficients("")
