#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Contracts Module

Defines the data handed to the export pipeline and its error taxonomy:
- PoemCollection / PoemRecord: the snapshot of works to publish
- ExportError family: failures that abort an export

Usage:
    from inkverse.contracts import PoemCollection, UnsupportedAsset

    collection = PoemCollection.from_json(json_str)
    collection.assert_valid()

Version: 1.0.0
"""

from .base import (
    BaseContract,
    ContractMetadata,
    ContractError,
    ContractValidationError,
    ExportError,
    UnsupportedAsset,
    PackagingInvariantViolation,
)

from .poem import (
    LayoutMode,
    ThemeStyle,
    PoemAnalysis,
    PoemRecord,
    PoemCollection,
    load_collection,
)

__all__ = [
    # Base
    "BaseContract",
    "ContractMetadata",
    "ContractError",
    "ContractValidationError",

    # Export errors
    "ExportError",
    "UnsupportedAsset",
    "PackagingInvariantViolation",

    # Poems
    "LayoutMode",
    "ThemeStyle",
    "PoemAnalysis",
    "PoemRecord",
    "PoemCollection",
    "load_collection",
]

__version__ = "1.0.0"
