#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Publication Exporter

Main orchestrator of the export pipeline. Takes a snapshot of the
collection and produces one of:
- EPUB 3 archive (bytes, or a file written atomically)
- print book (document tree or HTML)
- standalone HTML book

Version: 1.0.0
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union
import logging
import os
import tempfile

from config.settings import Settings, settings as default_settings
from inkverse.contracts import (
    PackagingInvariantViolation,
    PoemCollection,
    UnsupportedAsset,
)
from inkverse.epub import ArchiveBuilder, AssetEmbedder, Package, PackageAssembler
from inkverse.layout import (
    ContentDocument,
    ContentDocumentRenderer,
    HtmlBookRenderer,
    LayoutClassifier,
    PrintDocument,
    PrintPaginator,
    RenderTarget,
)

logger = logging.getLogger(__name__)

UNSAFE_FILENAME_CHARS = str.maketrans({c: "_" for c in '/\\:*?"<>|'})


@dataclass
class ExportResult:
    """One finished EPUB export"""
    filename: str
    data: bytes
    package: Package
    documents: List[ContentDocument] = field(default_factory=list)

    @property
    def identifier(self) -> str:
        return self.package.metadata.identifier

    @property
    def size(self) -> int:
        return len(self.data)


class PublicationExporter:
    """
    Export pipeline for a poem collection.

    Responsibilities:
    1. Validate the collection snapshot
    2. Classify and render every work for the target
    3. Embed images, assemble descriptors, pack the archive

    Usage:
        exporter = PublicationExporter()
        path = exporter.write_epub(collection, "exports/")

        # Or in memory:
        result = exporter.export_epub(collection)
        html_text = exporter.export_print_html(collection)
    """

    def __init__(self, settings: Optional[Settings] = None, validate: bool = True):
        """
        Initialize exporter.

        Args:
            settings: Book and layout settings (global settings when omitted)
            validate: Reject collections with missing or duplicate ids
        """
        self.settings = settings or default_settings
        self.validate = validate

        s = self.settings
        self.classifier = LayoutClassifier.from_settings(s)
        self.embedder = AssetEmbedder(max_bytes=s.max_asset_bytes)
        self.renderer = ContentDocumentRenderer(
            embedder=self.embedder,
            language=s.language,
            untitled=s.untitled_placeholder,
            anonymous=s.anonymous_placeholder,
        )
        self.assembler = PackageAssembler.from_settings(s)
        self.archive_builder = ArchiveBuilder()
        self.paginator = PrintPaginator.from_settings(s, classifier=self.classifier, renderer=self.renderer)
        self.html_renderer = HtmlBookRenderer.from_settings(s, embedder=self.embedder)

        logger.info(f"PublicationExporter initialized: {s.book_title}, {s.language}, {s.page_size}")

    # ------------------------------------------------------------------
    # EPUB
    # ------------------------------------------------------------------

    def export_epub(self, collection: PoemCollection, now: Optional[datetime] = None) -> ExportResult:
        """
        Build the EPUB archive in memory.

        Args:
            collection: Works in publication order
            now: Export timestamp (defaults to the current local time)

        Returns:
            ExportResult with file name and archive bytes

        Raises:
            ContractValidationError: collection is invalid
            UnsupportedAsset: an image cannot be embedded
            PackagingInvariantViolation: descriptors do not line up
        """
        logger.info("=== EPUB export ===")
        self._check_collection(collection)
        now = now or datetime.now().astimezone()

        logger.info("Step 1: Rendering content documents...")
        try:
            documents = self.render_documents(collection, RenderTarget.ARCHIVE)
        except UnsupportedAsset as e:
            logger.error(f"EPUB export aborted: {e}")
            raise

        assets = [document.asset for document in documents if document.asset is not None]

        logger.info("Step 2: Assembling package...")
        try:
            package = self.assembler.assemble(collection.records, documents, assets, now)
        except PackagingInvariantViolation:
            logger.exception("Package descriptors do not line up with the rendered works")
            raise

        logger.info("Step 3: Building archive...")
        data = self.archive_builder.build(package, documents, assets)

        result = ExportResult(
            filename=self.archive_filename(package.metadata.date),
            data=data,
            package=package,
            documents=documents,
        )

        logger.info(f"=== EPUB export complete: {result.filename} ({result.size} bytes) ===")

        return result

    def write_epub(
        self,
        collection: PoemCollection,
        output_dir: Optional[Union[str, Path]] = None,
        now: Optional[datetime] = None,
    ) -> Path:
        """
        Export and write the archive into output_dir.

        The file appears only once it is complete; a failed export leaves
        nothing behind.

        Returns:
            Path to the written .epub
        """
        result = self.export_epub(collection, now)

        directory = Path(output_dir) if output_dir else Path(self.settings.output_dir)
        directory.mkdir(parents=True, exist_ok=True)
        target = directory / result.filename

        with tempfile.NamedTemporaryFile(dir=directory, suffix=".part", delete=False) as tmp_file:
            tmp_path = Path(tmp_file.name)
            try:
                tmp_file.write(result.data)
            except OSError:
                tmp_file.close()
                tmp_path.unlink()
                raise

        try:
            os.replace(tmp_path, target)
        except OSError:
            tmp_path.unlink()
            raise

        logger.info(f"Output: {target}")

        return target

    def render_documents(self, collection: PoemCollection, target: RenderTarget) -> List[ContentDocument]:
        """Classify and render every work, in collection order"""
        return [
            self.renderer.render(record, self.classifier.classify(record.content), target, index)
            for index, record in enumerate(collection)
        ]

    def archive_filename(self, date: str) -> str:
        title = self.settings.book_title.translate(UNSAFE_FILENAME_CHARS).strip() or "collection"
        return f"{title}_{date}.epub"

    # ------------------------------------------------------------------
    # Print / HTML
    # ------------------------------------------------------------------

    def build_print_document(self, collection: PoemCollection, now: Optional[datetime] = None) -> PrintDocument:
        """Paginated print book for the browser print pipeline"""
        logger.info("=== Print export ===")
        self._check_collection(collection)
        try:
            return self.paginator.paginate(collection, now)
        except UnsupportedAsset as e:
            logger.error(f"Print export aborted: {e}")
            raise

    def export_print_html(self, collection: PoemCollection, now: Optional[datetime] = None) -> str:
        return self.build_print_document(collection, now).to_html()

    def export_html(self, collection: PoemCollection, now: Optional[datetime] = None) -> str:
        """Standalone HTML book"""
        logger.info("=== HTML export ===")
        self._check_collection(collection)
        try:
            return self.html_renderer.render(collection, now)
        except UnsupportedAsset as e:
            logger.error(f"HTML export aborted: {e}")
            raise

    def _check_collection(self, collection: PoemCollection):
        logger.info(f"Collection: {len(collection)} works")
        if self.validate:
            collection.assert_valid()

    @classmethod
    def from_json(cls, json_str: str, output_dir: Optional[Union[str, Path]] = None, **kwargs) -> Path:
        """
        Export a poems.json payload straight to an EPUB file.

        Args:
            json_str: Collection as JSON
            output_dir: Target directory
            **kwargs: Exporter init arguments
        """
        collection = PoemCollection.from_json(json_str)
        exporter = cls(**kwargs)
        return exporter.write_epub(collection, output_dir)
