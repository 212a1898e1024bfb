"""
Module 01 - Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
"""

# Error models and exceptions
from .errors import (
    CidTreeError,
    CidTreeException,
    ContentNotFoundException,
    ContentStoreException,
    ContentStoreTimeoutException,
    EmptyInputException,
    ErrorCodes,
    InputResolutionException,
    LeafNotFoundException,
    TreeSealedException,
)

# Tagged leaf inputs
from .inputs import (
    IdInput,
    InputKind,
    LeafInput,
    LiteralInput,
    PathInput,
    parse_leaf_input,
    resolve_input,
)

__all__ = [
    # Errors
    "CidTreeError",
    "CidTreeException",
    "ContentNotFoundException",
    "ContentStoreException",
    "ContentStoreTimeoutException",
    "EmptyInputException",
    "ErrorCodes",
    "InputResolutionException",
    "LeafNotFoundException",
    "TreeSealedException",
    # Inputs
    "IdInput",
    "InputKind",
    "LeafInput",
    "LiteralInput",
    "PathInput",
    "parse_leaf_input",
    "resolve_input",
]
