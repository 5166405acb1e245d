#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Package Assembler

Builds the cross-referenced descriptor set of the EPUB:
- manifest of every resource (stylesheet, cover, navigation, NCX,
  content documents, images)
- spine: cover, table of contents, then works in collection order
- navigation document and NCX listing works in collection order
- metadata with a fresh identifier per export

Version: 1.0.0
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, TYPE_CHECKING
import logging
import uuid

from config.constants import (
    CONTENTS_LABEL,
    COVER_DOCUMENT,
    COVER_LABEL,
    DEFAULT_BOOK_CREATOR,
    DEFAULT_BOOK_SUBTITLE,
    DEFAULT_BOOK_TITLE,
    DEFAULT_LANGUAGE,
    MEDIA_TYPE_CSS,
    MEDIA_TYPE_NCX,
    MEDIA_TYPE_XHTML,
    NAV_DOCUMENT,
    NCX_DOCUMENT,
    STYLESHEET,
)
from inkverse.contracts import PackagingInvariantViolation, PoemRecord
from inkverse.layout.renderer.base_renderer import escape_text
from inkverse.layout.renderer.styles import ARCHIVE_CSS
from .assets import EmbeddedAsset
from .registry import IdRegistry, ManifestItem, NavPoint

if TYPE_CHECKING:
    from inkverse.layout.renderer.content_renderer import ContentDocument

logger = logging.getLogger(__name__)


@dataclass
class PackageMetadata:
    """Publication metadata written to the package document"""
    title: str
    creator: str
    language: str
    identifier: str
    modified: str  # dcterms:modified, UTC, second precision
    date: str      # YYYY-MM-DD, shown on the cover and in the file name

    @classmethod
    def generate(
        cls,
        title: str,
        creator: str,
        language: str,
        now: Optional[datetime] = None,
    ) -> 'PackageMetadata':
        now = now or datetime.now().astimezone()
        return cls(
            title=title,
            creator=creator,
            language=language,
            identifier=f"urn:uuid:{uuid.uuid4()}",
            modified=now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            date=now.strftime("%Y-%m-%d"),
        )


@dataclass
class Package:
    """Descriptors plus the generated front matter, keyed by href"""
    metadata: PackageMetadata
    registry: IdRegistry
    resources: Dict[str, str] = field(default_factory=dict)

    @property
    def manifest(self) -> List[ManifestItem]:
        return self.registry.items

    @property
    def spine(self) -> List[str]:
        return self.registry.spine

    @property
    def navigation(self) -> List[NavPoint]:
        return self.registry.navigation

    @property
    def works(self) -> List[NavPoint]:
        return [point for point in self.registry.navigation if not point.front_matter]

    def package_document(self) -> str:
        """content.opf"""
        esc = escape_text
        meta = self.metadata

        manifest_lines = []
        for item in self.manifest:
            properties = f' properties="{esc(item.properties)}"' if item.properties else ""
            manifest_lines.append(
                f'<item id="{esc(item.id)}" href="{esc(item.href)}" media-type="{esc(item.media_type)}"{properties}/>'
            )
        spine_lines = [f'<itemref idref="{esc(item_id)}"/>' for item_id in self.spine]

        return f"""<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" unique-identifier="BookId" version="3.0" xml:lang="{esc(meta.language)}">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:identifier id="BookId">{esc(meta.identifier)}</dc:identifier>
    <dc:title>{esc(meta.title)}</dc:title>
    <dc:creator>{esc(meta.creator)}</dc:creator>
    <dc:language>{esc(meta.language)}</dc:language>
    <dc:date>{esc(meta.date)}</dc:date>
    <meta property="dcterms:modified">{esc(meta.modified)}</meta>
  </metadata>
  <manifest>
    {chr(10).join('    ' + line for line in manifest_lines).lstrip()}
  </manifest>
  <spine toc="ncx" page-progression-direction="ltr">
    {chr(10).join('    ' + line for line in spine_lines).lstrip()}
  </spine>
</package>
"""


class PackageAssembler:
    """
    Assembles manifest, spine, navigation and metadata.

    Usage:
        assembler = PackageAssembler(title="墨韵诗集", language="zh-CN")
        package = assembler.assemble(records, documents, assets)
        package.package_document()  # content.opf
    """

    def __init__(
        self,
        title: str = DEFAULT_BOOK_TITLE,
        subtitle: str = DEFAULT_BOOK_SUBTITLE,
        creator: str = DEFAULT_BOOK_CREATOR,
        language: str = DEFAULT_LANGUAGE,
        cover_label: str = COVER_LABEL,
        contents_label: str = CONTENTS_LABEL,
        stylesheet: str = ARCHIVE_CSS,
    ):
        self.title = title
        self.subtitle = subtitle
        self.creator = creator
        self.language = language
        self.cover_label = cover_label
        self.contents_label = contents_label
        self.stylesheet = stylesheet

    def assemble(
        self,
        records: Sequence[PoemRecord],
        documents: Sequence['ContentDocument'],
        assets: Sequence[EmbeddedAsset],
        now: Optional[datetime] = None,
    ) -> Package:
        """
        Build the package for one export.

        Args:
            records: Works in collection order
            documents: Archive content documents, one per record, same order
            assets: Embedded images of those documents

        Returns:
            Package with registry and generated front matter

        Raises:
            PackagingInvariantViolation: documents or assets do not line up
                with the records
        """
        self._check_inputs(records, documents, assets)

        metadata = PackageMetadata.generate(self.title, self.creator, self.language, now)
        registry = IdRegistry()

        # Front matter and non-linear resources
        registry.register("css", STYLESHEET, MEDIA_TYPE_CSS)
        registry.register("cover", COVER_DOCUMENT, MEDIA_TYPE_XHTML)
        registry.register("toc", NAV_DOCUMENT, MEDIA_TYPE_XHTML, properties="nav")
        registry.register("ncx", NCX_DOCUMENT, MEDIA_TYPE_NCX)
        registry.add_to_spine("cover")
        registry.add_to_spine("toc")
        registry.add_navigation(self.cover_label, COVER_DOCUMENT, front_matter=True)
        registry.add_navigation(self.contents_label, f"{NAV_DOCUMENT}#toc", front_matter=True)

        assets_by_index = {asset.index: asset for asset in assets}
        for document in documents:
            asset = assets_by_index.get(document.index)
            if asset is not None:
                registry.register(asset.manifest_id, asset.href, asset.media_type)

            registry.register(document.manifest_id, document.file_name, MEDIA_TYPE_XHTML)
            registry.add_to_spine(document.manifest_id)
            registry.add_navigation(document.title, document.file_name)

        package = Package(metadata=metadata, registry=registry)
        package.resources = {
            STYLESHEET: self.stylesheet,
            COVER_DOCUMENT: self._cover_document(metadata),
            NAV_DOCUMENT: self._navigation_document(package),
            NCX_DOCUMENT: self._ncx_document(package),
        }

        problems = registry.check()
        if problems:
            raise PackagingInvariantViolation(problems)

        logger.info(
            f"Package assembled: {len(documents)} works, {len(assets)} images, "
            f"{len(registry.items)} manifest items"
        )

        return package

    def _check_inputs(
        self,
        records: Sequence[PoemRecord],
        documents: Sequence['ContentDocument'],
        assets: Sequence[EmbeddedAsset],
    ):
        problems = []

        if len(records) != len(documents):
            problems.append(f"{len(records)} records but {len(documents)} content documents")

        for index, (record, document) in enumerate(zip(records, documents)):
            if document.record_id != record.id or document.index != index:
                problems.append(f"content document #{index} belongs to {document.record_id!r}, expected {record.id!r}")

        documents_by_index = {document.index: document for document in documents}
        for asset in assets:
            document = documents_by_index.get(asset.index)
            if document is None or document.asset is not asset:
                problems.append(f"image {asset.resource_name!r} has no owning content document")
                continue
            references = document.markup.count(f'src="{escape_text(asset.href)}"')
            if references != 1:
                problems.append(f"{document.file_name} references {asset.href!r} {references} times")

        asset_set = {id(asset) for asset in assets}
        for document in documents:
            if document.asset is not None and id(document.asset) not in asset_set:
                problems.append(f"{document.file_name} has an image that is not being packed")

        if problems:
            raise PackagingInvariantViolation(problems)

    # ------------------------------------------------------------------
    # Generated documents
    # ------------------------------------------------------------------

    def _cover_document(self, metadata: PackageMetadata) -> str:
        esc = escape_text
        return f"""<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml" xmlns:epub="http://www.idpf.org/2007/ops" xml:lang="{esc(self.language)}" lang="{esc(self.language)}">
<head>
  <title>{esc(self.cover_label)}</title>
  <link rel="stylesheet" type="text/css" href="{STYLESHEET}"/>
</head>
<body epub:type="cover">
  <div class="cover-container">
    <div class="cover-box">
      <h1 class="cover-title">{esc(self.title)}</h1>
      <p class="cover-subtitle">{esc(self.subtitle)}</p>
    </div>
    <p class="cover-date">{esc(metadata.date)}</p>
  </div>
</body>
</html>
"""

    def _navigation_document(self, package: Package) -> str:
        esc = escape_text
        works = "".join(
            f'\n      <li><a href="{esc(point.href)}">{esc(point.title)}</a></li>'
            for point in package.works
        )
        landmarks = [
            f'<li><a epub:type="cover" href="{COVER_DOCUMENT}">{esc(self.cover_label)}</a></li>',
            f'<li><a epub:type="toc" href="{NAV_DOCUMENT}#toc">{esc(self.contents_label)}</a></li>',
        ]
        if package.works:
            landmarks.append(
                f'<li><a epub:type="bodymatter" href="{esc(package.works[0].href)}">{esc(package.works[0].title)}</a></li>'
            )

        return f"""<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml" xmlns:epub="http://www.idpf.org/2007/ops" xml:lang="{esc(self.language)}" lang="{esc(self.language)}">
<head>
  <title>{esc(self.contents_label)}</title>
  <link rel="stylesheet" type="text/css" href="{STYLESHEET}"/>
</head>
<body>
  <nav epub:type="toc" id="toc">
    <h1>{esc(self.contents_label)}</h1>
    <ol>{works}
    </ol>
  </nav>
  <nav epub:type="landmarks" id="landmarks" hidden="hidden">
    <ol>
      {(chr(10) + '      ').join(landmarks)}
    </ol>
  </nav>
</body>
</html>
"""

    def _ncx_document(self, package: Package) -> str:
        """EPUB 2 table of contents: cover first, then works"""
        esc = escape_text
        points = [point for point in package.navigation if point.path != NAV_DOCUMENT]
        nav_points = []
        for order, point in enumerate(points, start=1):
            nav_points.append(
                f'    <navPoint id="navpoint-{order}" playOrder="{order}">'
                f'<navLabel><text>{esc(point.title)}</text></navLabel>'
                f'<content src="{esc(point.href)}"/></navPoint>'
            )

        return f"""<?xml version="1.0" encoding="UTF-8"?>
<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1" xml:lang="{esc(self.language)}">
  <head>
    <meta name="dtb:uid" content="{esc(package.metadata.identifier)}"/>
    <meta name="dtb:depth" content="1"/>
    <meta name="dtb:totalPageCount" content="0"/>
    <meta name="dtb:maxPageNumber" content="0"/>
  </head>
  <docTitle><text>{esc(self.title)}</text></docTitle>
  <navMap>
{chr(10).join(nav_points)}
  </navMap>
</ncx>
"""

    @classmethod
    def from_settings(cls, settings) -> 'PackageAssembler':
        return cls(
            title=settings.book_title,
            subtitle=settings.book_subtitle,
            creator=settings.book_creator,
            language=settings.language,
            cover_label=settings.cover_label,
            contents_label=settings.contents_label,
        )
