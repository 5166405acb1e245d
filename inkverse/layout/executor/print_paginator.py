#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Print Paginator

Lays the collection out as a print book for the browser print pipeline:
- cover, table of contents, then one block per work
- every block starts a new page
- per-work flow chosen by the layout classifier
- estimated page numbers so callers can report the sheet count

The result is a flat document tree, serializable to one HTML page.

Version: 1.0.0
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional
import logging
import math

from config.constants import (
    CONTENTS_LABEL,
    COUNT_TEMPLATE,
    DEFAULT_BOOK_SUBTITLE,
    DEFAULT_BOOK_TITLE,
    PAGE_SIZES,
    PRINT_IMAGE_HEIGHT_PT,
    PRINT_LINE_HEIGHT_PT,
    PRINT_MARGIN_PT,
)
from inkverse.contracts import PoemCollection, PoemRecord
from inkverse.layout.classifier import FlowVariant, LayoutClassifier
from inkverse.layout.renderer.base_renderer import RenderTarget, escape_text
from inkverse.layout.renderer.content_renderer import ContentDocumentRenderer
from inkverse.layout.renderer.styles import print_css

logger = logging.getLogger(__name__)


class PrintBlockKind(Enum):
    """Kinds of top-level blocks in the print book"""
    COVER = "cover"
    TABLE_OF_CONTENTS = "toc"
    WORK = "work"


@dataclass
class PageState:
    """Current state of pagination"""
    content_height: float
    current_page: int = 0
    y_position: float = 0

    def available_space(self) -> float:
        """Calculate available space on current page"""
        return self.content_height - self.y_position

    def new_page(self):
        """Start a new page"""
        self.current_page += 1
        self.y_position = 0

    def advance(self, height: float) -> int:
        """Advance by height, spilling onto following pages; returns pages spanned"""
        spanned = 1
        remaining = height
        while remaining > self.available_space():
            remaining -= self.available_space()
            self.new_page()
            spanned += 1
        self.y_position += remaining
        return spanned


@dataclass
class PrintBlock:
    """One top-level block with its page-break marker"""
    kind: PrintBlockKind
    markup: str
    page_number: int
    page_span: int = 1
    page_break_before: bool = True
    record_id: Optional[str] = None
    flow: Optional[FlowVariant] = None

    def to_dict(self) -> Dict:
        return {
            "kind": self.kind.value,
            "page_number": self.page_number,
            "page_span": self.page_span,
            "page_break_before": self.page_break_before,
            "record_id": self.record_id,
            "flow": self.flow.value if self.flow else None,
        }


@dataclass
class PrintDocument:
    """The print book: ordered blocks plus document-level settings"""
    title: str
    subtitle: str
    language: str
    page_size: str
    blocks: List[PrintBlock] = field(default_factory=list)

    @property
    def works(self) -> List[PrintBlock]:
        return [block for block in self.blocks if block.kind == PrintBlockKind.WORK]

    @property
    def page_count(self) -> int:
        if not self.blocks:
            return 0
        last = self.blocks[-1]
        return last.page_number + last.page_span - 1

    def to_html(self) -> str:
        """Single renderable HTML document for the print/PDF pipeline"""
        esc = escape_text
        body = []
        for block in self.blocks:
            classes = ["print-block", f"block-{block.kind.value}"]
            if block.page_break_before:
                classes.insert(0, "page-break")
            body.append(
                f'<div class="{" ".join(classes)}" data-page="{block.page_number}">{block.markup}</div>'
            )

        return f"""<!DOCTYPE html>
<html lang="{esc(self.language)}">
<head>
<meta charset="UTF-8"/>
<title>{esc(self.subtitle)} - {esc(self.title)}</title>
<style>
{print_css(self.page_size)}</style>
</head>
<body>
<div class="print-footer">{esc(self.subtitle)} • {esc(self.title)}</div>
{chr(10).join(body)}
</body>
</html>
"""


class PrintPaginator:
    """
    Builds the print book for a collection.

    Usage:
        paginator = PrintPaginator(page_size="A4")
        document = paginator.paginate(collection)
        html_text = document.to_html()
    """

    TOC_HEADING_HEIGHT = 96
    TOC_ROW_HEIGHT = 30
    TITLE_BLOCK_HEIGHT = 96
    CHAR_WIDTH_PT = 16  # one CJK glyph at body size
    LONG_COLUMN_WIDTH_PT = 512

    def __init__(
        self,
        classifier: Optional[LayoutClassifier] = None,
        renderer: Optional[ContentDocumentRenderer] = None,
        page_size: str = "A4",
        title: str = DEFAULT_BOOK_TITLE,
        subtitle: str = DEFAULT_BOOK_SUBTITLE,
        contents_label: str = CONTENTS_LABEL,
        count_template: str = COUNT_TEMPLATE,
    ):
        """
        Initialize paginator.

        Args:
            classifier: Long/short classifier
            renderer: Content renderer used for work blocks
            page_size: Page size name (A4, A5, B5, letter)
            title: Book title
            subtitle: Book subtitle
            contents_label: Heading of the table of contents
            count_template: Cover line, {count} = number of works
        """
        self.classifier = classifier or LayoutClassifier()
        self.renderer = renderer or ContentDocumentRenderer()
        self.page_size = page_size if page_size in PAGE_SIZES else "A4"
        self.title = title
        self.subtitle = subtitle
        self.contents_label = contents_label
        self.count_template = count_template

        width, height = PAGE_SIZES[self.page_size]
        self.content_width = width - 2 * PRINT_MARGIN_PT
        self.content_height = height - 2 * PRINT_MARGIN_PT

        logger.debug(f"PrintPaginator initialized: {self.page_size}")

    def paginate(self, collection: PoemCollection, now: Optional[datetime] = None) -> PrintDocument:
        """
        Lay out the whole collection.

        Raises:
            UnsupportedAsset: a work's image cannot be embedded
        """
        logger.info(f"Paginating {len(collection)} works for print...")

        now = now or datetime.now()
        state = PageState(content_height=self.content_height)
        document = PrintDocument(
            title=self.title,
            subtitle=self.subtitle,
            language=self.renderer.language,
            page_size=self.page_size,
        )

        state.new_page()
        document.blocks.append(PrintBlock(
            kind=PrintBlockKind.COVER,
            markup=self._cover_markup(len(collection), now),
            page_number=state.current_page,
        ))

        state.new_page()
        start = state.current_page
        span = state.advance(self.TOC_HEADING_HEIGHT + self.TOC_ROW_HEIGHT * len(collection))
        document.blocks.append(PrintBlock(
            kind=PrintBlockKind.TABLE_OF_CONTENTS,
            markup=self._toc_markup(collection),
            page_number=start,
            page_span=span,
        ))

        for index, record in enumerate(collection):
            classification = self.classifier.classify(record.content)
            rendered = self.renderer.render(record, classification, RenderTarget.PRINT, index)

            state.new_page()
            start = state.current_page
            span = state.advance(self._estimate_block_height(record, rendered.flow))

            document.blocks.append(PrintBlock(
                kind=PrintBlockKind.WORK,
                markup=rendered.markup,
                page_number=start,
                page_span=span,
                record_id=record.id,
                flow=rendered.flow,
            ))

        logger.info(f"Print layout complete: {len(document.blocks)} blocks across {document.page_count} pages")

        return document

    def _cover_markup(self, count: int, now: datetime) -> str:
        esc = escape_text
        return (
            '<div class="cover">'
            f'<div class="cover-box"><h1 class="cover-title">{esc(self.title)}</h1>'
            f'<p class="cover-subtitle">{esc(self.subtitle)}</p></div>'
            f'<p class="cover-count">{esc(self.count_template.format(count=count))}</p>'
            f'<p class="cover-date">{now.strftime("%Y-%m-%d")}</p>'
            '</div>'
        )

    def _toc_markup(self, collection: PoemCollection) -> str:
        esc = escape_text
        rows = []
        for index, record in enumerate(collection, start=1):
            rows.append(
                '<div class="toc-entry">'
                f'<span class="toc-title"><span class="toc-index">{index:02d}</span>'
                f'{esc(self.renderer.display_title(record))}</span>'
                f'<span class="toc-author">{esc(self.renderer.display_author(record))}</span>'
                '</div>'
            )
        return f'<div class="toc"><h2>{esc(self.contents_label)}</h2>{"".join(rows)}</div>'

    def _estimate_block_height(
        self,
        record: PoemRecord,
        flow: FlowVariant,
    ) -> float:
        """
        Estimate the printed height of a work.

        Vertical works are sized to one page by the layout. Horizontal
        works wrap each source line at the column width.
        """
        image = PRINT_IMAGE_HEIGHT_PT if record.has_image else 0

        if flow == FlowVariant.SHORT_VERTICAL:
            return min(self.content_height, image + self.content_height * 0.6)

        column = self.content_width
        if flow == FlowVariant.LONG_FORM:
            column = min(column, self.LONG_COLUMN_WIDTH_PT)
        chars_per_line = max(1, int(column // self.CHAR_WIDTH_PT))

        printed_lines = 0
        for line in record.content.split("\n"):
            printed_lines += max(1, math.ceil(len(line) / chars_per_line))

        return image + self.TITLE_BLOCK_HEIGHT + printed_lines * PRINT_LINE_HEIGHT_PT

    @classmethod
    def from_settings(cls, settings, classifier=None, renderer=None) -> 'PrintPaginator':
        return cls(
            classifier=classifier or LayoutClassifier.from_settings(settings),
            renderer=renderer,
            page_size=settings.page_size,
            title=settings.book_title,
            subtitle=settings.book_subtitle,
            contents_label=settings.contents_label,
            count_template=settings.count_template,
        )
