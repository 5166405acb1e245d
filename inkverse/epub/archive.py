#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Archive Builder

Packs an assembled package into the EPUB container:
1. `mimetype` first, stored without compression
2. `META-INF/container.xml` pointing at the package document
3. everything else deflated, in manifest order

Every entry path is checked against the id registry before the archive
is written; a mismatch is a programming fault, never repaired.

Version: 1.0.0
"""

from typing import Dict, List, Sequence, Tuple, TYPE_CHECKING
import io
import logging
import time
import zipfile

from lxml import etree

from config.constants import (
    CONTAINER_PATH,
    EPUB_MIMETYPE,
    MEDIA_TYPE_OPF,
    MIMETYPE_PATH,
)
from inkverse.contracts import PackagingInvariantViolation
from .assets import EmbeddedAsset
from .package import Package

if TYPE_CHECKING:
    from inkverse.layout.renderer.content_renderer import ContentDocument

logger = logging.getLogger(__name__)

XML_SUFFIXES = (".xhtml", ".opf", ".ncx", ".xml")

XML_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, load_dtd=False)


class ArchiveBuilder:
    """
    Builds the EPUB byte stream.

    Usage:
        builder = ArchiveBuilder()
        data = builder.build(package, documents, assets)
        Path("book.epub").write_bytes(data)
    """

    def __init__(self, compresslevel: int = 9):
        self.compresslevel = compresslevel

    def build(
        self,
        package: Package,
        documents: Sequence['ContentDocument'],
        assets: Sequence[EmbeddedAsset],
    ) -> bytes:
        """
        Pack the archive.

        Args:
            package: Assembled package (descriptors + front matter)
            documents: Archive content documents
            assets: Embedded images

        Returns:
            EPUB bytes

        Raises:
            PackagingInvariantViolation: entries and descriptors disagree,
                or an XML entry is not well-formed
        """
        entries = self.plan_entries(package, documents, assets)

        try:
            package.registry.verify_packed(path for path, _ in entries)
            self._check_well_formed(entries)
        except PackagingInvariantViolation:
            logger.exception("Archive entries do not match the package descriptors")
            raise

        buffer = io.BytesIO()
        date_time = time.localtime()[:6]

        with zipfile.ZipFile(buffer, "w") as zf:
            for path, data in entries:
                info = zipfile.ZipInfo(path, date_time=date_time)
                info.external_attr = 0o644 << 16
                if path == MIMETYPE_PATH:
                    info.compress_type = zipfile.ZIP_STORED
                    zf.writestr(info, data)
                else:
                    info.compress_type = zipfile.ZIP_DEFLATED
                    zf.writestr(info, data, compresslevel=self.compresslevel)

        archive = buffer.getvalue()

        logger.info(f"Archive built: {len(entries)} entries, {len(archive)} bytes")

        return archive

    def plan_entries(
        self,
        package: Package,
        documents: Sequence['ContentDocument'],
        assets: Sequence[EmbeddedAsset],
    ) -> List[Tuple[str, bytes]]:
        """
        Ordered (path, bytes) list: reserved entries, package document,
        then manifest order. Sources the manifest does not mention are
        appended so that verification reports them.
        """
        registry = package.registry

        sources: Dict[str, bytes] = {}
        for href, text in package.resources.items():
            sources[href] = text.encode("utf-8")
        for document in documents:
            sources[document.file_name] = document.markup.encode("utf-8")
        for asset in assets:
            sources[asset.href] = asset.data

        entries = [
            (MIMETYPE_PATH, EPUB_MIMETYPE.encode("ascii")),
            (CONTAINER_PATH, self.container_document(registry.package_path).encode("utf-8")),
            (registry.package_path, package.package_document().encode("utf-8")),
        ]

        for item in package.manifest:
            data = sources.pop(item.href, None)
            if data is None:
                # verify_packed reports the missing path
                continue
            entries.append((registry.archive_path(item.href), data))

        for href, data in sources.items():
            entries.append((registry.archive_path(href), data))

        return entries

    @staticmethod
    def container_document(package_path: str) -> str:
        return f"""<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="{package_path}" media-type="{MEDIA_TYPE_OPF}"/>
  </rootfiles>
</container>
"""

    def _check_well_formed(self, entries: Sequence[Tuple[str, bytes]]):
        problems = []
        for path, data in entries:
            if not path.endswith(XML_SUFFIXES):
                continue
            try:
                etree.fromstring(data, XML_PARSER)
            except etree.XMLSyntaxError as e:
                problems.append(f"{path} is not well-formed XML: {e}")

        if problems:
            raise PackagingInvariantViolation(problems)
