"""
Module 01 - Schemas
File: errors.py

Purpose: Standard error taxonomy for tree construction, verification and
content-store access. Defines both Pydantic models for structured error
communication and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Tree Errors
    EMPTY_INPUT = "EMPTY_INPUT"
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"
    TREE_SEALED = "TREE_SEALED"
    ROOT_MISMATCH = "ROOT_MISMATCH"

    # Input Errors
    INPUT_RESOLUTION_ERROR = "INPUT_RESOLUTION_ERROR"

    # Content Store Errors
    CONTENT_STORE_ERROR = "CONTENT_STORE_ERROR"
    CONTENT_STORE_TIMEOUT = "CONTENT_STORE_TIMEOUT"
    CONTENT_NOT_FOUND = "CONTENT_NOT_FOUND"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class CidTreeError(BaseModel):
    """
    Base error model for structured error communication.

    Used where an error has to be reported as data (CLI JSON output)
    rather than raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.LEAF_NOT_FOUND],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "CidTreeException":
        """Convert this error model to a raised exception."""
        return CidTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class CidTreeException(Exception):
    """
    Base exception for all cidtree errors.

    Carries structured error information and can be converted to a
    CidTreeError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "CIDTREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> CidTreeError:
        """Convert this exception to a CidTreeError model."""
        return CidTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputException(CidTreeException):
    """Raised when a tree is built from zero leaf identifiers."""

    def __init__(self, message: str = "Cannot build a tree from an empty leaf list") -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            retryable=False,
        )


class LeafNotFoundException(CidTreeException):
    """Raised when a registry lookup targets an identifier never ingested as a leaf."""

    def __init__(
        self,
        content_id: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["content_id"] = content_id
        super().__init__(
            message=f"Leaf not found in registry: {content_id}",
            code=ErrorCodes.LEAF_NOT_FOUND,
            details=full_details,
            retryable=False,
        )
        self.content_id = content_id


class TreeSealedException(CidTreeException):
    """Raised on any attempt to mutate a tree after construction finished."""

    def __init__(self, message: str = "Tree is sealed; nodes cannot be created or relinked") -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.TREE_SEALED,
            retryable=False,
        )


class InputResolutionException(CidTreeException):
    """Raised when a tagged input cannot be resolved to bytes."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INPUT_RESOLUTION_ERROR,
            details=details,
            retryable=False,
        )


class ContentStoreException(CidTreeException):
    """Raised when the content store fails to hash or fetch data."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
        code: str = ErrorCodes.CONTENT_STORE_ERROR,
        retryable: bool = False,
    ) -> None:
        full_details = details or {}
        if status_code is not None:
            full_details["status_code"] = status_code
        super().__init__(
            message=message,
            code=code,
            details=full_details,
            retryable=retryable,
        )
        self.status_code = status_code


class ContentStoreTimeoutException(ContentStoreException):
    """Raised when a content-store call exceeds its per-call timeout."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            details=details,
            code=ErrorCodes.CONTENT_STORE_TIMEOUT,
            retryable=True,
        )


class ContentNotFoundException(ContentStoreException):
    """Raised when the content store holds no data for an identifier."""

    def __init__(
        self,
        content_id: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["content_id"] = content_id
        super().__init__(
            message=f"Content not found: {content_id}",
            details=full_details,
            code=ErrorCodes.CONTENT_NOT_FOUND,
        )
        self.content_id = content_id
