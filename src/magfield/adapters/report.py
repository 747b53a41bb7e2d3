# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Plain-text field report.

Layout:

    Results For

    Latitude:       30.00N
    Longitude:      88.51W
    Altitude:        0.010 kilometers above mean sea level
    Date:           2019.5

           Main Field             Secular Change
    F    =  46944.3 nT ± 152.0 nT  -118.8 nT/yr
    ...
    Decl =     -1° 59' ± 19'         -5.2'/yr
    Incl =     59°  9' ± 13'         -4.6'/yr

    Grid Variation =  -1° 59'
"""
from magfield.domain.conversions import normalize_longitude
from magfield.domain.errors import Advisory
from magfield.domain.magnetic_field import MagneticField
from magfield.domain.units import degrees_to_dms


def _hemisphere(value: float, positive: str, negative: str) -> str:
    if value < 0:
        return f"{-value:4.2f}{negative}"
    return f"{value:4.2f}{positive}"


def _dms_minutes(degrees: float) -> tuple[float, float]:
    d, m, s = degrees_to_dms(degrees)
    return d, m + s / 60.0


def format_report(
    field: MagneticField,
    advisories: list[Advisory] | None = None,
    altitude_km: float | None = None,
    above_ellipsoid: bool = True,
    spherical: bool = False,
) -> str:
    """
    Render a field result as the human-readable point report.

    Args:
        field: Evaluated field.
        advisories: Printed as "Warning:" lines ahead of the table.
        altitude_km: Altitude to display; defaults to the field's
            height above the ellipsoid.
        above_ellipsoid: Whether altitude_km is relative to the ellipsoid
            (True) or mean sea level (False).
        spherical: Show geocentric-spherical X, Y, Z and omit H, D, I, GV.

    Returns:
        Report text ending in a newline.
    """
    location = field.location
    if altitude_km is None:
        altitude_km = location.height_m / 1000.0
        above_ellipsoid = True

    lon = normalize_longitude(location.longitude_deg)
    if lon >= 180.0:
        lon_text = f"{360.0 - lon:4.2f}W"
    else:
        lon_text = f"{lon:4.2f}E"

    relationship = "below" if altitude_km < 0 else "above"
    reference = "the WGS-84 ellipsoid" if above_ellipsoid else "mean sea level"

    lines = [
        "Results For",
        "",
        f"Latitude:\t{_hemisphere(location.latitude_deg, 'N', 'S')}",
        f"Longitude:\t{lon_text}",
        f"Altitude:\t{abs(altitude_km):6.3f} kilometers {relationship} {reference}",
        f"Date:\t\t{field.decimal_year:5.1f}",
        "",
    ]
    for advisory in advisories or []:
        lines.append(f"Warning: {advisory.message}")
        lines.append("")

    if spherical:
        x, y, z, dx, dy, dz = field.spherical_components()
        qualifier = " (Spherical)"
    else:
        x, y, z, dx, dy, dz = field.ellipsoidal_components()
        qualifier = ""

    lines.append("       Main Field             Secular Change")
    lines.append(f"F    = {field.f:8.1f} nT ± {field.err_f:5.1f} nT  {field.df:6.1f} nT/yr")
    if not spherical:
        lines.append(
            f"H    = {field.h:8.1f} nT ± {field.err_h:5.1f} nT  {field.dh:6.1f} nT/yr"
        )
    lines.append(f"X    = {x:8.1f} nT ± {field.err_x:5.1f} nT  {dx:6.1f} nT/yr{qualifier}")
    lines.append(f"Y    = {y:8.1f} nT ± {field.err_y:5.1f} nT  {dy:6.1f} nT/yr{qualifier}")
    lines.append(f"Z    = {z:8.1f} nT ± {field.err_z:5.1f} nT  {dz:6.1f} nT/yr{qualifier}")

    if not spherical:
        d_deg, d_min = _dms_minutes(field.d)
        i_deg, i_min = _dms_minutes(field.i)
        gv_deg, gv_min = _dms_minutes(field.gv)
        lines.append(
            f"Decl =    {d_deg:3.0f}° {d_min:2.0f}' ± {field.err_d * 60:2.0f}'"
            f"         {field.dd * 60:4.1f}'/yr"
        )
        lines.append(
            f"Incl =    {i_deg:3.0f}° {i_min:2.0f}' ± {field.err_i * 60:2.0f}'"
            f"         {field.di * 60:4.1f}'/yr"
        )
        lines.append("")
        lines.append(f"Grid Variation =  {gv_deg:2.0f}° {gv_min:2.0f}'")

    return "\n".join(lines) + "\n"
