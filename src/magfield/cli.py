# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for single-point field evaluation.

Usage:
    # Prompt for each value
    magfield

    # Latitude, longitude, altitude (km above MSL) and date
    magfield 30 -88.51 0.01 2019.5
    magfield "N30 0 0" "W88,30,36" E0.01 "07/01/2019"

    # Another coefficient file, spherical components, local geoid height
    magfield -c WMM2015v1.COF -s --geoid-height -28.7 30 -88.51 0.01 2019.5
"""
import argparse
import logging
import sys

from magfield.adapters.fixed_geoid import FixedGeoidHeight
from magfield.adapters.input_parsing import parse_altitude, parse_date, parse_lat_lng
from magfield.adapters.report import format_report
from magfield.domain.coefficients import CoefficientSet, load_coefficients
from magfield.domain.conversions import GeodeticLocation
from magfield.domain.errors import MagfieldError
from magfield.domain.magnetic_field import FieldEvaluator

_PROMPTS = {
    'latitude': (
        "Please enter latitude North Latitude positive. "
        "For example: 30, 30, 30 (D,M,S) or 30.508 (Decimal Degrees) (both are north). "
    ),
    'longitude': (
        "Please enter longitude East longitude positive, West negative. "
        "For example: -100.5 or -100, 30, 0 for 100.5 degrees west. "
    ),
    'altitude': (
        "Please enter height above mean sea level (in kilometers). "
        "[For height above WGS-84 Ellipsoid prefix E, for example (E20.1)]. "
    ),
    'date': (
        "Please enter the decimal year or calendar date "
        "(YYYY.yyy, MM DD YYYY or MM/DD/YYYY) "
    ),
}

_LONGITUDE_RANGE_ERROR = (
    "Degree input is outside legal range. The legal range is from -180 to 360."
)


def _prompt(name: str, parse):
    """Ask until the answer parses; 'q' or end of input quits."""
    while True:
        try:
            answer = input(_PROMPTS[name]).strip()
        except EOFError:
            answer = 'q'
        if answer == 'q':
            print("Goodbye")
            sys.exit(1)
        try:
            return parse(answer)
        except ValueError as e:
            print(e)


def _read_interactive() -> tuple[float, float, tuple[float, bool], float]:
    return (
        _prompt('latitude', parse_lat_lng),
        _prompt('longitude', parse_lat_lng),
        _prompt('altitude', parse_altitude),
        _prompt('date', parse_date),
    )


def _read_positional(values: list[str]) -> tuple[float, float, tuple[float, bool], float]:
    return (
        parse_lat_lng(values[0]),
        parse_lat_lng(values[1]),
        parse_altitude(values[2]),
        parse_date(values[3]),
    )


def run(
    coefficients: CoefficientSet,
    latitude_deg: float,
    longitude_deg: float,
    altitude_km: float,
    above_ellipsoid: bool,
    decimal_year: float,
    geoid_height_m: float = 0.0,
    spherical: bool = False,
) -> str:
    """
    Evaluate one point and return the report text.

    Longitude must lie in [-180, 360); negative values are shifted by 360.

    Raises:
        ValueError: longitude or latitude outside the legal range.
    """
    if not -180.0 <= longitude_deg < 360.0:
        raise ValueError(_LONGITUDE_RANGE_ERROR)
    if longitude_deg < 0.0:
        longitude_deg += 360.0

    height_m = altitude_km * 1000.0
    if not above_ellipsoid:
        geoid = FixedGeoidHeight(geoid_height_m)
        height_m = geoid.height_above_ellipsoid(latitude_deg, longitude_deg, height_m)

    location = GeodeticLocation(latitude_deg, longitude_deg, height_m)
    field, advisories = FieldEvaluator(coefficients).evaluate(location, decimal_year)
    return format_report(
        field,
        advisories,
        altitude_km=altitude_km,
        above_ellipsoid=above_ellipsoid,
        spherical=spherical,
    )


def main():
    parser = argparse.ArgumentParser(
        description="Estimate Earth's main magnetic field at a point (World Magnetic Model)"
    )
    parser.add_argument(
        '--cof-file', '-c',
        help="COF coefficients file to use (default: bundled WMM2015v1.COF)"
    )
    parser.add_argument(
        '--spherical', '-s', action='store_true', default=False,
        help="Output geocentric-spherical components instead of ellipsoidal"
    )
    parser.add_argument(
        '--geoid-height', type=float, default=0.0,
        help="Geoid height above the ellipsoid in meters for MSL altitudes (default: 0)"
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true', default=False,
        help="Log coefficient loading and advisories"
    )
    parser.add_argument(
        'values', nargs='*', metavar='latitude longitude altitude date',
        help="Point to evaluate; prompts for each value when omitted"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if args.values and len(args.values) != 4:
        print(
            "Error: specify a latitude, longitude, altitude and date in that order",
            file=sys.stderr,
        )
        sys.exit(1)

    try:
        coefficients = load_coefficients(args.cof_file)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except MagfieldError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    valid = coefficients.valid_from
    print(
        f"COF File: {coefficients.name}, Epoch: {coefficients.epoch}, "
        f"Valid Date: {valid.month}/{valid.day}/{valid.year}"
    )

    try:
        if args.values:
            latitude, longitude, (altitude, hae), year = _read_positional(args.values)
        else:
            latitude, longitude, (altitude, hae), year = _read_interactive()

        report = run(
            coefficients,
            latitude_deg=latitude,
            longitude_deg=longitude,
            altitude_km=altitude,
            above_ellipsoid=hae,
            decimal_year=year,
            geoid_height_m=args.geoid_height,
            spherical=args.spherical,
        )
    except (ValueError, MagfieldError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print()
    print(report, end='')


if __name__ == '__main__':
    main()
