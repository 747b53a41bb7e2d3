# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
CSV field exporter.

Exports evaluated fields as CSV, one row per result.
External dependencies (csv, file I/O) are confined to this adapter.
"""
import csv

from magfield.domain.magnetic_field import MagneticField
from magfield.ports.export import FieldExporter

_HEADER = [
    'lat_deg', 'lon_deg', 'height_km', 'decimal_year',
    'x_nt', 'y_nt', 'z_nt', 'h_nt', 'f_nt',
    'd_deg', 'i_deg', 'gv_deg',
    'dx_nt_yr', 'dy_nt_yr', 'dz_nt_yr', 'dh_nt_yr', 'df_nt_yr',
    'dd_deg_yr', 'di_deg_yr',
    'err_d_deg',
]


class CsvFieldExporter(FieldExporter):
    """Exports evaluated fields to CSV in ellipsoidal axes."""

    def export(self, fields: list[MagneticField], path: str) -> int:
        with open(path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(_HEADER)

            for field in fields:
                x, y, z, dx, dy, dz = field.ellipsoidal_components()
                writer.writerow([
                    f'{field.location.latitude_deg:.6f}',
                    f'{field.location.longitude_deg:.6f}',
                    f'{field.location.height_m / 1000.0:.3f}',
                    f'{field.decimal_year:.4f}',
                    f'{x:.1f}',
                    f'{y:.1f}',
                    f'{z:.1f}',
                    f'{field.h:.1f}',
                    f'{field.f:.1f}',
                    f'{field.d:.4f}',
                    f'{field.i:.4f}',
                    f'{field.gv:.4f}',
                    f'{dx:.2f}',
                    f'{dy:.2f}',
                    f'{dz:.2f}',
                    f'{field.dh:.2f}',
                    f'{field.df:.2f}',
                    f'{field.dd:.5f}',
                    f'{field.di:.5f}',
                    f'{field.err_d:.3f}',
                ])

        return len(fields)
