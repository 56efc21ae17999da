"""
RequestGate — framework-neutral validation step for a request pipeline.

A web adapter extracts nothing itself: it hands the request object to
check(), then either continues the pipeline (status 200) or answers with
status 400 and the JSON-ready payload.

The request may be any object or mapping exposing `body` (flat field ->
value mapping) and optionally `session` carrying a `lang` hint.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from field_validation.core.validation_engine import ValidationResult, Validator

logger = logging.getLogger(__name__)

HTTP_OK = 200
HTTP_BAD_REQUEST = 400


@dataclass
class GateResponse:
    status_code: int
    result: ValidationResult

    @property
    def passed(self) -> bool:
        return self.status_code == HTTP_OK

    @property
    def payload(self) -> Optional[dict]:
        """JSON body for a rejected request; None when the request may proceed."""
        return None if self.passed else self.result.to_dict()


class RequestGate:
    """
    Wraps a Validator for use in front of request handlers.
    Stateless between calls; share one instance per schema.
    """

    def __init__(self, validator: Validator) -> None:
        self.validator = validator

    def check(self, request: Any) -> GateResponse:
        result = self.validator.validate_request(request)
        if result.success:
            return GateResponse(status_code=HTTP_OK, result=result)
        logger.info("Request rejected with %d validation errors", len(result.errors))
        return GateResponse(status_code=HTTP_BAD_REQUEST, result=result)
