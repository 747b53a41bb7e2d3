# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Concurrent batch evaluation of the field model.

Uses ThreadPoolExecutor from stdlib to evaluate many (location, time)
queries against one shared FieldEvaluator. The evaluator's Legendre
cache and location memo are lock-protected, so sharing is safe.

External dependencies (concurrent.futures) are confined to this adapter
layer.
"""
import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import date, datetime

from magfield.domain.conversions import GeodeticLocation
from magfield.domain.errors import Advisory, MagfieldError
from magfield.domain.magnetic_field import FieldEvaluator, MagneticField

_log = logging.getLogger(__name__)

FieldQuery = tuple[GeodeticLocation, float | date | datetime]


class ConcurrentFieldEvaluator:
    """
    Evaluates batches of field queries on a thread pool.

    Args:
        evaluator: Shared evaluator.
        max_workers: Thread pool size.
            Default: min(32, os.cpu_count() + 4), same as Python default.
    """

    def __init__(self, evaluator: FieldEvaluator, max_workers: int | None = None):
        self._evaluator = evaluator
        self._max_workers = max_workers or min(32, (os.cpu_count() or 1) + 4)

    @property
    def evaluator(self) -> FieldEvaluator:
        return self._evaluator

    def evaluate_batch(
        self,
        queries: list[FieldQuery],
    ) -> list[tuple[MagneticField, list[Advisory]] | None]:
        """
        Evaluate every query concurrently.

        Args:
            queries: (location, time) pairs.

        Returns:
            One entry per query, in input order. Queries that fail with a
            library or value error are logged and returned as None.
        """
        results: list[tuple[MagneticField, list[Advisory]] | None] = [None] * len(queries)

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            futures = {
                executor.submit(self._evaluator.evaluate, location, t): index
                for index, (location, t) in enumerate(queries)
            }

            for future in as_completed(futures):
                index = futures[future]
                try:
                    results[index] = future.result()
                except (MagfieldError, ValueError) as e:
                    _log.warning("Skipping query %d %s: %s", index, queries[index], e)
                    continue

        return results

    def fields(self, queries: list[FieldQuery]) -> list[MagneticField]:
        """Successful fields only, in input order."""
        return [result[0] for result in self.evaluate_batch(queries) if result is not None]
