# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for the edges of the field model.

Adapters implement these to supply geoid heights and export results.
"""
from magfield.ports.export import FieldExporter
from magfield.ports.geoid import GeoidHeightSource

__all__ = ["FieldExporter", "GeoidHeightSource"]
