# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for user input, geoid heights, reports and batch export.

External dependencies (csv, concurrent.futures, file I/O) are confined
to this layer.
"""
from magfield.adapters.input_parsing import parse_lat_lng, parse_altitude, parse_date
from magfield.adapters.fixed_geoid import FixedGeoidHeight
from magfield.adapters.report import format_report
from magfield.adapters.concurrent_evaluator import ConcurrentFieldEvaluator
from magfield.adapters.csv_exporter import CsvFieldExporter

__all__ = [
    "parse_lat_lng",
    "parse_altitude",
    "parse_date",
    "FixedGeoidHeight",
    "format_report",
    "ConcurrentFieldEvaluator",
    "CsvFieldExporter",
]
