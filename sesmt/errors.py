# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Exception types raised by the compliance services.

Domain rule functions report problems as ``ValidationResult`` values; the
service layer turns failed results and unresolved references into the
exceptions below. Each exception carries an HTTP-style status code and an
error type so an outer application can map it to a response without
inspecting the message.
"""

from typing import List, Optional


class CustomException(Exception):
    """Base class for custom application exceptions."""

    def __init__(self, message: str, status_code: int = 500, error_type: str = "application-error"):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_type = error_type


class ValidationException(CustomException):
    """A structurally valid reference violates a cross-field business rule."""

    def __init__(self, message: str, validation_errors: Optional[List[str]] = None):
        super().__init__(message, 422, "validation-error")
        self.validation_errors = validation_errors or []

    def __str__(self) -> str:
        if not self.validation_errors:
            return self.message
        return f"{self.message}: {'; '.join(self.validation_errors)}"


class NotFoundException(CustomException):
    """A referenced id does not resolve to an active entity."""

    def __init__(self, message: str, entity: Optional[str] = None, entity_id: Optional[str] = None):
        super().__init__(message, 404, "resource-not-found")
        self.entity = entity
        self.entity_id = entity_id

    @classmethod
    def for_entity(cls, entity: str, entity_id: str) -> "NotFoundException":
        """Build the standard message for a missing or inactive entity."""
        return cls(f"{entity} not found or inactive: {entity_id}", entity=entity, entity_id=entity_id)
