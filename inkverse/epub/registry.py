#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Id Registry

Single owner of the string keys that tie an EPUB together: manifest ids,
hrefs, spine order, navigation targets and the archive paths they map
to. PackageAssembler fills it; ArchiveBuilder checks packed entries
against it before anything is written.

Version: 1.0.0
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional
import logging
import posixpath

from config.constants import (
    CONTAINER_PATH,
    CONTENT_DIR,
    MEDIA_TYPE_XHTML,
    MIMETYPE_PATH,
    PACKAGE_DOCUMENT,
)
from inkverse.contracts import PackagingInvariantViolation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManifestItem:
    """One manifest entry; href is relative to the package document"""
    id: str
    href: str
    media_type: str
    properties: Optional[str] = None

    @property
    def is_content_document(self) -> bool:
        return self.media_type == MEDIA_TYPE_XHTML


@dataclass(frozen=True)
class NavPoint:
    """One navigation entry"""
    title: str
    href: str
    front_matter: bool = False

    @property
    def path(self) -> str:
        """href without fragment"""
        return self.href.split("#", 1)[0]


class IdRegistry:
    """
    Registry of manifest items, spine and navigation.

    Usage:
        registry = IdRegistry()
        registry.register("poem_0", "poem_0.xhtml", MEDIA_TYPE_XHTML)
        registry.add_to_spine("poem_0")
        registry.add_navigation("静夜思", "poem_0.xhtml")
        registry.verify_packed(zip_paths)
    """

    # Entries every archive has that are not manifest items
    RESERVED_ENTRIES = (MIMETYPE_PATH, CONTAINER_PATH)

    def __init__(self, content_dir: str = CONTENT_DIR):
        self.content_dir = content_dir
        self._items: Dict[str, ManifestItem] = {}
        self._by_href: Dict[str, ManifestItem] = {}
        self._spine: List[str] = []
        self._navigation: List[NavPoint] = []

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        item_id: str,
        href: str,
        media_type: str,
        properties: Optional[str] = None,
    ) -> ManifestItem:
        if item_id in self._items:
            raise PackagingInvariantViolation([f"duplicate manifest id {item_id!r}"])
        if href in self._by_href:
            raise PackagingInvariantViolation([f"duplicate manifest href {href!r}"])

        item = ManifestItem(item_id, href, media_type, properties)
        self._items[item_id] = item
        self._by_href[href] = item
        return item

    def add_to_spine(self, item_id: str):
        item = self._items.get(item_id)
        if item is None:
            raise PackagingInvariantViolation([f"spine references unknown id {item_id!r}"])
        if not item.is_content_document:
            raise PackagingInvariantViolation([f"spine references non-document {item_id!r}"])
        if item_id in self._spine:
            raise PackagingInvariantViolation([f"{item_id!r} appears twice in spine"])
        self._spine.append(item_id)

    def add_navigation(self, title: str, href: str, front_matter: bool = False) -> NavPoint:
        point = NavPoint(title, href, front_matter)
        if point.path not in self._by_href:
            raise PackagingInvariantViolation([f"navigation targets unknown document {href!r}"])
        self._navigation.append(point)
        return point

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def items(self) -> List[ManifestItem]:
        return list(self._items.values())

    @property
    def spine(self) -> List[str]:
        return list(self._spine)

    @property
    def navigation(self) -> List[NavPoint]:
        return list(self._navigation)

    def get(self, item_id: str) -> Optional[ManifestItem]:
        return self._items.get(item_id)

    def archive_path(self, href: str) -> str:
        """Archive entry path for an href relative to the package document"""
        return posixpath.join(self.content_dir, href)

    @property
    def package_path(self) -> str:
        return self.archive_path(PACKAGE_DOCUMENT)

    def expected_entries(self) -> List[str]:
        """Every archive path the descriptors point at, in manifest order"""
        return [self.archive_path(item.href) for item in self._items.values()]

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def check(self) -> List[str]:
        """Internal consistency of manifest, spine and navigation"""
        problems = []

        spine_ids = set(self._spine)
        for item in self._items.values():
            if item.is_content_document and item.id not in spine_ids:
                problems.append(f"content document {item.id!r} is not in the spine")

        for point in self._navigation:
            if point.path not in self._by_href:
                problems.append(f"navigation targets unknown document {point.href!r}")

        nav_items = [item for item in self._items.values() if item.properties and "nav" in item.properties.split()]
        if len(nav_items) != 1:
            problems.append(f"expected exactly one navigation document, found {len(nav_items)}")

        return problems

    def verify_packed(self, packed: Iterable[str]):
        """
        Compare archive entry paths against the descriptors.

        Raises:
            PackagingInvariantViolation: a referenced path is missing, an
                entry is not referenced, or an entry is duplicated
        """
        packed = list(packed)
        problems = self.check()

        seen = set()
        for path in packed:
            if path in seen:
                problems.append(f"entry {path!r} packed twice")
            seen.add(path)

        if not packed or packed[0] != MIMETYPE_PATH:
            problems.append(f"first entry must be {MIMETYPE_PATH!r}")

        for path in self.expected_entries():
            if path not in seen:
                problems.append(f"manifest path {path!r} is not in the archive")

        allowed = set(self.expected_entries()) | set(self.RESERVED_ENTRIES) | {self.package_path}
        for path in packed:
            if path not in allowed:
                problems.append(f"archive entry {path!r} is not referenced by the manifest")

        for required in (CONTAINER_PATH, self.package_path):
            if required not in seen:
                problems.append(f"required entry {required!r} is missing")

        if problems:
            raise PackagingInvariantViolation(problems)

        logger.debug(f"Registry verified {len(packed)} archive entries")
