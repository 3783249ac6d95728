"""Exception types shared across the core and the web layer."""

from __future__ import annotations

from enum import Enum


class SuperPromptError(Exception):
    """Base error for the package."""

    pass


class ModelGatewayError(SuperPromptError):
    """The model call failed: transport error, provider error or empty text."""

    pass


class ParseFailureKind(str, Enum):
    """Why a model response could not be used."""

    MALFORMED = "malformed"  # Not JSON after stripping fences
    SEMANTIC = "semantic"  # Valid JSON, wrong shape or empty


class ResponseParseError(SuperPromptError):
    """A model response did not satisfy its expected contract."""

    def __init__(self, kind: ParseFailureKind, message: str):
        super().__init__(message)
        self.kind = kind


class DomainError(SuperPromptError):
    """A caller or user mistake. Always surfaced, never recovered."""

    status_code = 400


class DomainValidationError(DomainError):
    """Missing or invalid input, or a forbidden operation."""

    status_code = 400


class NotFoundError(DomainError):
    """Record does not exist or is not owned by the acting user."""

    status_code = 404


class ConflictError(DomainError):
    """Record clashes with an existing one (e.g. duplicate bucket name)."""

    status_code = 409
