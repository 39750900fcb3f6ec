"""Parameter initialization: layering, cleanup and validation.

Architecture:
    Final query parameters are built from four layers, lowest to highest::

        defaults < global_params["all"] < global_params[type] < call site

    Each layer is first rewritten to the API's camelCase names, so a caller
    writing ``order_by`` still overrides a global ``orderBy``. The merged
    result is then validated with the registry's parameter model and replaced
    by the model's normalized output.

    A failed validation never loses parameters: the merged values are kept and
    the failure is reported through the returned flag, unless strict
    parameter validation is configured.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from ..core.config import Config
from ..core.endpoint import EndpointDescriptor
from ..core.enums import ResourceType
from ..core.exceptions import ParameterValidationError
from ..models.params import MAX_LIMIT, BaseParams

logger = logging.getLogger(__name__)

DEFAULT_PARAMS: Mapping[str, Any] = {"offset": 0, "limit": MAX_LIMIT}

ALL_TYPES = "all"


class ParameterManager:
    """Builds validated query parameters from a shared Config."""

    def __init__(self, config: Config) -> None:
        self.config = config
        if config.validation.check_parameters:
            self._check_global_params()

    def initialize(
        self, raw_params: Mapping[str, Any] | None, descriptor: EndpointDescriptor
    ) -> tuple[dict[str, Any], bool | None]:
        """Merge and validate parameters for one query.

        Args:
            raw_params: Call-site parameters (snake_case or camelCase names)
            descriptor: Validated endpoint the parameters are for

        Returns:
            Tuple of (parameters, validated). ``validated`` is None when
            parameter validation is disabled.

        Raises:
            ParameterValidationError: If validation fails and strict
                parameter validation is enabled
        """
        resource_type = descriptor.type
        model = self.config.schemas.params.get(resource_type)

        merged: dict[str, Any] = dict(DEFAULT_PARAMS)
        for layer in (
            self.config.global_params.get(ALL_TYPES),
            self.config.global_params.get(str(resource_type)),
            raw_params,
        ):
            merged.update(self._wire_names(self._clean(layer), model))

        if not self.config.validation.check_parameters:
            return merged, None

        model = self.config.schemas.params_model(resource_type)
        try:
            validated = model.model_validate(merged)
        except ValidationError as exc:
            errors = exc.errors(include_url=False)
            logger.warning(
                f"Parameter validation failed for {descriptor}: {len(errors)} error(s)",
                extra={"endpoint": str(descriptor), "type": str(resource_type), "errors": errors},
            )
            if self.config.validation.strict_parameters:
                raise ParameterValidationError(
                    f"Invalid parameters for '{resource_type}': {exc}",
                    resource_type=str(resource_type),
                    errors=errors,
                ) from exc
            return merged, False

        return validated.model_dump(by_alias=True, exclude_unset=True), True

    def _clean(self, params: Mapping[str, Any] | None) -> dict[str, Any]:
        if not params:
            return {}
        if not self.config.omit_undefined:
            return dict(params)
        cleaned = {key: value for key, value in params.items() if value is not None}
        removed = len(params) - len(cleaned)
        if removed:
            logger.debug(f"Omitted {removed} undefined parameter(s)")
        return cleaned

    @staticmethod
    def _wire_names(params: dict[str, Any], model: type[BaseModel] | None) -> dict[str, Any]:
        if model is None:
            return params
        renamed: dict[str, Any] = {}
        for key, value in params.items():
            field_info = model.model_fields.get(key)
            renamed[field_info.alias if field_info and field_info.alias else key] = value
        return renamed

    def _check_global_params(self) -> None:
        """Validate each global parameter group once, logging any problems."""
        for key, params in self.config.global_params.items():
            if key == ALL_TYPES:
                model: type[BaseModel] = BaseParams
            elif ResourceType.from_str(key) is not None:
                model = self.config.schemas.params.get(ResourceType(key), BaseParams)
            else:
                logger.warning(f"Ignoring global parameters for unknown type: {key!r}")
                continue

            try:
                model.model_validate(self._wire_names(self._clean(params), model))
            except ValidationError as exc:
                logger.warning(
                    f"Invalid global parameters for '{key}': {exc.error_count()} error(s)",
                    extra={"type": key, "errors": exc.errors(include_url=False)},
                )
            else:
                logger.debug(f"Global parameters for '{key}' are valid")
