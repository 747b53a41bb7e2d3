# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for field result export.

Adapters implement this to write batch evaluation results in various
formats.
"""
from typing import Protocol, runtime_checkable

from magfield.domain.magnetic_field import MagneticField


@runtime_checkable
class FieldExporter(Protocol):
    """Port for exporting evaluated fields to file."""

    def export(self, fields: list[MagneticField], path: str) -> int:
        """
        Export evaluated fields to a file.

        Args:
            fields: Results from FieldEvaluator.evaluate.
            path: Output file path.

        Returns:
            Number of fields exported.
        """
        ...
