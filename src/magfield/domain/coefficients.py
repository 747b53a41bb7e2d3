# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
World Magnetic Model spherical-harmonic coefficient table.

COF text format:

    line 1:  epoch  name  MM/DD/YYYY          e.g. "2015.0 WMM-2015 12/15/2014"
    rows:    n  m  g  h  dg  dh               (nT and nT/yr)

Rows with fewer than six fields (blank lines, the 9999... sentinel) are
skipped. Triangular storage: g[n, m] for 0 <= m <= n <= 12; degree 0 is
unused and stays zero.

Coefficients vary linearly from the epoch:
    g(t) = g(epoch) + (t - epoch) · dg
"""
import logging
import pathlib
from dataclasses import dataclass
from datetime import date, datetime
from typing import NamedTuple

import numpy as np

from magfield.domain.constants import WMMConstants
from magfield.domain.conversions import datetime_to_decimal_year, to_decimal_year
from magfield.domain.errors import (
    Advisory,
    AdvisoryKind,
    DegreeOutOfRange,
    HeaderFieldInvalid,
    MalformedCoefficientFile,
)

_log = logging.getLogger(__name__)

DEFAULT_COF = "WMM2015v1.COF"


class CoefficientLookup(NamedTuple):
    """Time-adjusted coefficients for one (n, m)."""
    g: float
    h: float
    dg: float
    dh: float
    advisory: Advisory | None


@dataclass(frozen=True, eq=False)
class CoefficientSet:
    """Immutable WMM coefficient table with its epoch and validity window.

    g, h (nT) and dg, dh (nT/yr) are read-only (max_degree+1)² arrays
    indexed [n, m].
    """
    epoch: float
    name: str
    valid_from: date
    g: np.ndarray
    h: np.ndarray
    dg: np.ndarray
    dh: np.ndarray
    max_degree: int = WMMConstants.MAX_DEGREE

    @property
    def valid_from_year(self) -> float:
        return datetime_to_decimal_year(self.valid_from)

    @property
    def valid_until(self) -> float:
        """Last decimal year the secular variation is published for."""
        return self.epoch + WMMConstants.VALIDITY_YEARS

    def validity_advisory(self, t: float | date | datetime) -> Advisory | None:
        """STALE_MODEL advisory when t is outside the validity window."""
        year = to_decimal_year(t)
        if self.valid_from_year <= year <= self.valid_until:
            return None
        return Advisory(
            AdvisoryKind.STALE_MODEL,
            f"requested date {year:.3f} is outside the validity period "
            f"{self.valid_from_year:.3f}-{self.valid_until:.3f} of {self.name}",
        )

    def coefficients_at(
        self,
        n: int,
        m: int,
        t: float | date | datetime,
    ) -> CoefficientLookup:
        """
        g, h extrapolated to time t, plus their (constant) rates.

        Raises:
            DegreeOutOfRange: n or m outside [0, max_degree], or m > n.
        """
        if not (0 <= n <= self.max_degree and 0 <= m <= self.max_degree) or m > n:
            raise DegreeOutOfRange(n, m, self.max_degree)
        year = to_decimal_year(t)
        dt = year - self.epoch
        dg = float(self.dg[n, m])
        dh = float(self.dh[n, m])
        return CoefficientLookup(
            g=float(self.g[n, m]) + dt * dg,
            h=float(self.h[n, m]) + dt * dh,
            dg=dg,
            dh=dh,
            advisory=self.validity_advisory(year),
        )


def _parse_header(line: str, source: str, line_number: int) -> tuple[float, str, date]:
    fields = line.split()
    if len(fields) < 3:
        raise MalformedCoefficientFile(
            f"header needs 'epoch name MM/DD/YYYY', got {line.strip()!r}",
            source, line_number,
        )
    try:
        epoch = float(fields[0])
    except ValueError:
        raise HeaderFieldInvalid(
            f"bad epoch {fields[0]!r}", source, line_number
        ) from None
    try:
        valid_from = datetime.strptime(fields[2], "%m/%d/%Y").date()
    except ValueError:
        raise HeaderFieldInvalid(
            f"bad valid date {fields[2]!r}, expected MM/DD/YYYY", source, line_number
        ) from None
    return epoch, fields[1], valid_from


def parse_coefficients(text: str, source: str = "<string>") -> CoefficientSet:
    """
    Parse COF text into a CoefficientSet.

    Args:
        text: Full file contents.
        source: Name used in error messages.

    Raises:
        MalformedCoefficientFile: missing header, bad row, (n, m) outside
            the degree-12 triangle, or no coefficient rows at all.
        HeaderFieldInvalid: epoch or valid date does not parse.
    """
    max_degree = WMMConstants.MAX_DEGREE
    size = max_degree + 1
    tables = {key: np.zeros((size, size)) for key in ("g", "h", "dg", "dh")}

    header: tuple[float, str, date] | None = None
    rows = 0
    for line_number, line in enumerate(text.splitlines(), start=1):
        if header is None:
            if line.strip():
                header = _parse_header(line, source, line_number)
            continue

        fields = line.split()
        if len(fields) < 6:
            continue
        try:
            n = int(fields[0])
            m = int(fields[1])
            values = [float(v) for v in fields[2:6]]
        except ValueError:
            raise MalformedCoefficientFile(
                f"bad coefficient row {line.strip()!r}", source, line_number
            ) from None
        if not (1 <= n <= max_degree and 0 <= m <= n):
            raise MalformedCoefficientFile(
                f"(n, m) = ({n}, {m}) outside 0 <= m <= n, 1 <= n <= {max_degree}",
                source, line_number,
            )
        for key, value in zip(("g", "h", "dg", "dh"), values):
            tables[key][n, m] = value
        rows += 1

    if header is None:
        raise MalformedCoefficientFile("no header line", source)
    if rows == 0:
        raise MalformedCoefficientFile("no coefficient rows", source)

    for table in tables.values():
        table.flags.writeable = False

    epoch, name, valid_from = header
    _log.debug("Parsed %d coefficient rows for %s from %s", rows, name, source)
    return CoefficientSet(
        epoch=epoch,
        name=name,
        valid_from=valid_from,
        max_degree=max_degree,
        **tables,
    )


def load_coefficients(path: str | pathlib.Path | None = None) -> CoefficientSet:
    """Load a COF file, or the bundled WMM2015v1.COF when path is None.

    Raises:
        OSError: file cannot be read.
        MalformedCoefficientFile: contents do not parse.
    """
    if path is None:
        path = pathlib.Path(__file__).parent.parent / "data" / DEFAULT_COF
    else:
        path = pathlib.Path(path)

    with open(path, encoding="utf-8") as f:
        text = f.read()

    coefficients = parse_coefficients(text, source=str(path))
    _log.info(
        "Loaded %s (epoch %.1f, valid from %s) from %s",
        coefficients.name, coefficients.epoch, coefficients.valid_from.isoformat(), path,
    )
    return coefficients
