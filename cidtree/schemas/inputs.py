"""
Module 01 - Schemas
File: inputs.py

Purpose: Tagged leaf inputs. Callers state explicitly whether an input is
literal data, a file to read, or an identifier that was hashed elsewhere;
nothing is inferred from the shape of a string.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from .errors import InputResolutionException


logger = logging.getLogger(__name__)


InputKind = Literal["literal", "path", "id"]


class LiteralInput(BaseModel):
    """Raw bytes supplied directly by the caller."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["literal"] = "literal"
    data: bytes = Field(..., description="Raw leaf content")

    @classmethod
    def from_text(cls, text: str, encoding: str = "utf-8") -> "LiteralInput":
        """Build a literal input from a text string."""
        return cls(data=text.encode(encoding))


class PathInput(BaseModel):
    """A file whose contents become the leaf content."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["path"] = "path"
    path: Path = Field(..., description="File to read")


class IdInput(BaseModel):
    """An identifier already computed by the content store."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["id"] = "id"
    content_id: str = Field(..., min_length=1, description="Pre-computed content identifier")

    @field_validator("content_id")
    @classmethod
    def _no_surrounding_whitespace(cls, v: str) -> str:
        if v != v.strip():
            raise ValueError("content_id must not contain leading or trailing whitespace")
        return v


LeafInput = Annotated[
    Union[LiteralInput, PathInput, IdInput],
    Field(discriminator="kind"),
]

_leaf_input_adapter: TypeAdapter[LeafInput] = TypeAdapter(LeafInput)


def parse_leaf_input(data: dict) -> LiteralInput | PathInput | IdInput:
    """Validate a plain dict (e.g. from JSON/YAML) into a tagged leaf input."""
    return _leaf_input_adapter.validate_python(data)


def resolve_input(item: LiteralInput | PathInput) -> bytes:
    """
    Resolve a literal or path input to the bytes that will be hashed.

    IdInput carries no content and is rejected here; the ingestion layer
    passes its identifier through without hashing.

    Raises:
        InputResolutionException: If the file cannot be read or the input
            carries no content
    """
    if isinstance(item, LiteralInput):
        return item.data

    if isinstance(item, PathInput):
        try:
            data = item.path.read_bytes()
        except OSError as e:
            raise InputResolutionException(
                f"Cannot read input file: {item.path}",
                details={"path": str(item.path), "reason": str(e)},
            ) from e
        logger.debug(f"Read {len(data)} bytes from {item.path}")
        return data

    raise InputResolutionException(
        f"Input of kind {getattr(item, 'kind', type(item).__name__)!r} has no content to resolve",
        details={"kind": getattr(item, "kind", None)},
    )


__all__ = [
    "InputKind",
    "LiteralInput",
    "PathInput",
    "IdInput",
    "LeafInput",
    "parse_leaf_input",
    "resolve_input",
]
