"""Per-item result validation.

Results are checked against the registry's model for their resource type and
failures are reported, never raised: callers always get the raw results back.
Failing items are grouped by the distinct set of errors they produced, and the
indices of each group are compressed into ranges for readable logs::

    Validation failed for results at indices 0-3, 7: (('title',), 'missing')

The full payload of every failing item goes to the ``marvelquery.diagnostics``
logger, which applications can route to a file.
"""

from __future__ import annotations

import json
import logging
import warnings
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from ..core.endpoint import EndpointDescriptor
from ..core.exceptions import ResultValidationWarning
from ..models.registry import SchemaRegistry

logger = logging.getLogger(__name__)
diagnostics = logging.getLogger("marvelquery.diagnostics")


def group_consecutive_indices(indices: Sequence[int]) -> list[str]:
    """Compress sorted indices into ranges.

    Example:
        >>> group_consecutive_indices([1, 2, 3, 5, 6, 9])
        ['1-3', '5-6', '9']
    """
    groups: list[str] = []
    if not indices:
        return groups

    start = end = indices[0]
    for index in indices[1:]:
        if index == end + 1:
            end = index
            continue
        groups.append(str(start) if start == end else f"{start}-{end}")
        start = end = index
    groups.append(str(start) if start == end else f"{start}-{end}")
    return groups


def error_signature(exc: ValidationError) -> tuple[tuple[tuple[Any, ...], str], ...]:
    """Hashable summary of a validation error: (location, error type) pairs."""
    return tuple((tuple(error["loc"]), error["type"]) for error in exc.errors(include_url=False))


class ResultValidator:
    """Validates result items against their resource type's schema."""

    def __init__(self, schemas: SchemaRegistry) -> None:
        self._schemas = schemas

    def validate(self, results: Sequence[Any], descriptor: EndpointDescriptor) -> bool:
        """Validate every item of ``results``.

        Args:
            results: Raw result items from the response envelope
            descriptor: Endpoint the results were fetched from

        Returns:
            True when every item matches the schema

        Raises:
            SchemaNotFound: If no result model is registered for the type
        """
        model = self._schemas.result_model(descriptor.type)
        failures: dict[tuple, list[int]] = {}

        for index, item in enumerate(results):
            try:
                model.model_validate(item)
            except ValidationError as exc:
                failures.setdefault(error_signature(exc), []).append(index)
                diagnostics.debug(
                    f"----- Failed result at index {index} ({descriptor}) -----\n"
                    f"{json.dumps(item, indent=2, default=str)}",
                    extra={"endpoint": str(descriptor), "index": index},
                )

        if not failures:
            logger.debug(f"All {len(results)} results validated successfully")
            return True

        self._log_failures(failures, len(results), descriptor)
        return False

    @staticmethod
    def _log_failures(
        failures: dict[tuple, list[int]], total: int, descriptor: EndpointDescriptor
    ) -> None:
        failed = 0
        for signature, indices in failures.items():
            failed += len(indices)
            groups = group_consecutive_indices(indices)
            label = "results at indices" if len(indices) > 1 else "result at index"
            logger.debug(
                f"Validation failed for {label} {', '.join(groups)}: {signature}",
                extra={"endpoint": str(descriptor)},
            )

        if failed == total:
            message = f"All {total} results from {descriptor} failed validation"
        else:
            message = f"{failed} of {total} results from {descriptor} failed validation"
        logger.warning(message, extra={"endpoint": str(descriptor), "failed": failed})
        warnings.warn(message, ResultValidationWarning, stacklevel=4)
