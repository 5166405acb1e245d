#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HTML Book Renderer

Single self-contained HTML page for reading on screen: cover, linked
table of contents, one section per work, footer. Images stay inline as
data URIs so the file can be opened offline.

Version: 1.0.0
"""

from datetime import datetime
from typing import Optional
import logging

from config.constants import (
    CONTENTS_LABEL,
    COUNT_TEMPLATE,
    DEFAULT_BOOK_SUBTITLE,
    DEFAULT_BOOK_TITLE,
)
from inkverse.contracts import PoemCollection
from inkverse.layout.classifier import LayoutClassifier
from .base_renderer import BaseRenderer, RenderTarget
from .content_renderer import ContentDocumentRenderer
from .styles import SCREEN_CSS

logger = logging.getLogger(__name__)


class HtmlBookRenderer(BaseRenderer):
    """
    Renders a whole collection to one HTML document.

    Usage:
        renderer = HtmlBookRenderer(title="墨韵诗集")
        html_text = renderer.render(collection)
    """

    def __init__(
        self,
        content_renderer: Optional[ContentDocumentRenderer] = None,
        classifier: Optional[LayoutClassifier] = None,
        title: str = DEFAULT_BOOK_TITLE,
        subtitle: str = DEFAULT_BOOK_SUBTITLE,
        contents_label: str = CONTENTS_LABEL,
        count_template: str = COUNT_TEMPLATE,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.content_renderer = content_renderer or ContentDocumentRenderer(
            language=self.language,
            untitled=self.untitled,
            anonymous=self.anonymous,
        )
        self.classifier = classifier or LayoutClassifier()
        self.title = title
        self.subtitle = subtitle
        self.contents_label = contents_label
        self.count_template = count_template

    def render(self, collection: PoemCollection, now: Optional[datetime] = None) -> str:
        """
        Render the collection.

        Raises:
            UnsupportedAsset: a work's image is not a usable data URI
        """
        now = now or datetime.now()
        esc = self._escape_html

        sections = []
        for index, record in enumerate(collection):
            document = self.content_renderer.render(
                record,
                self.classifier.classify(record.content),
                RenderTarget.SCREEN,
                index,
            )
            sections.append(document.markup)

        logger.info(f"HTML book rendered: {len(sections)} works")

        return f"""<!DOCTYPE html>
<html lang="{esc(self.language)}">
<head>
<meta charset="UTF-8"/>
<meta name="viewport" content="width=device-width, initial-scale=1.0"/>
<title>{esc(self.title)} - {esc(self.subtitle)}</title>
<style>
{SCREEN_CSS}</style>
</head>
<body>
{self._cover(len(collection), now)}
{self._table_of_contents(collection)}
{chr(10).join(sections)}
<footer class="site-footer">Generated by {esc(self.subtitle)} • {now.year}</footer>
</body>
</html>
"""

    def _cover(self, count: int, now: datetime) -> str:
        esc = self._escape_html
        return (
            '<section id="top" class="page-container cover">'
            '<div class="cover-box">'
            f'<h1 class="cover-title">{esc(self.title)}</h1>'
            f'<p class="cover-subtitle">{esc(self.subtitle)}</p>'
            '</div>'
            '<div class="cover-meta">'
            f'<p>{esc(self.count_template.format(count=count))}</p>'
            f'<p>{now.strftime("%Y-%m-%d")}</p>'
            '</div>'
            f'<a class="cover-link" href="#toc">{esc(self.contents_label)}</a>'
            '</section>'
        )

    def _table_of_contents(self, collection: PoemCollection) -> str:
        esc = self._escape_html
        rows = []
        for index, record in enumerate(collection, start=1):
            rows.append(
                f'<a class="toc-entry" href="#{esc(f"poem-{record.id}")}">'
                f'<span><span class="toc-index">{index:02d}</span>{esc(self.display_title(record))}</span>'
                f'<span class="toc-author">{esc(self.display_author(record))}</span>'
                '</a>'
            )
        return (
            '<section id="toc" class="page-container">'
            '<div class="toc-panel">'
            f'<h2>{esc(self.contents_label)}</h2>'
            f'{"".join(rows)}'
            '</div>'
            '</section>'
        )

    @classmethod
    def supports_target(cls, target: RenderTarget) -> bool:
        return target == RenderTarget.SCREEN

    @classmethod
    def from_settings(cls, settings, embedder=None) -> 'HtmlBookRenderer':
        content_renderer = ContentDocumentRenderer(
            embedder=embedder,
            language=settings.language,
            untitled=settings.untitled_placeholder,
            anonymous=settings.anonymous_placeholder,
        )
        return cls(
            content_renderer=content_renderer,
            classifier=LayoutClassifier.from_settings(settings),
            title=settings.book_title,
            subtitle=settings.book_subtitle,
            contents_label=settings.contents_label,
            count_template=settings.count_template,
            language=settings.language,
            untitled=settings.untitled_placeholder,
            anonymous=settings.anonymous_placeholder,
        )
