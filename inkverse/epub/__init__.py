#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
EPUB Module

Turns rendered content documents into an EPUB 3 container.

Components:
- AssetEmbedder: decode inline images into named resources
- IdRegistry: manifest ids, hrefs, spine and navigation in one place
- PackageAssembler: manifest, spine, navigation, metadata
- ArchiveBuilder: ZIP container with the stored mimetype entry first

Version: 1.0.0
"""

from .assets import AssetEmbedder, EmbeddedAsset
from .registry import IdRegistry, ManifestItem, NavPoint
from .package import Package, PackageAssembler, PackageMetadata
from .archive import ArchiveBuilder

__all__ = [
    "AssetEmbedder",
    "EmbeddedAsset",
    "IdRegistry",
    "ManifestItem",
    "NavPoint",
    "Package",
    "PackageAssembler",
    "PackageMetadata",
    "ArchiveBuilder",
]
