#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Content Document Renderer

Renders one work into markup for a given target. The renderer is a
dispatch table keyed by (target, flow variant); the flow variant comes
from the layout classification and the record's declared orientation.

- archive: standalone XHTML document for the EPUB
- print: page block for the print book (long form or declared orientation)
- screen: section of the standalone HTML book (declared orientation)

Version: 1.0.0
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple
import logging

from config.constants import STYLESHEET
from inkverse.contracts import LayoutMode, PoemRecord
from inkverse.epub.assets import AssetEmbedder, EmbeddedAsset
from inkverse.layout.classifier import Classification, FlowVariant
from .base_renderer import BaseRenderer, RenderTarget

logger = logging.getLogger(__name__)


@dataclass
class ContentDocument:
    """One rendered work"""
    record_id: str
    index: int
    title: str
    target: RenderTarget
    flow: FlowVariant
    markup: str
    asset: Optional[EmbeddedAsset] = None

    @property
    def manifest_id(self) -> str:
        return f"poem_{self.index}"

    @property
    def file_name(self) -> str:
        """Path relative to the package document"""
        return f"poem_{self.index}.xhtml"

    @property
    def anchor(self) -> str:
        """Fragment id used by the print and HTML books"""
        return f"poem-{self.record_id}"

    @property
    def is_long_form(self) -> bool:
        return self.flow == FlowVariant.LONG_FORM


@dataclass
class _Parts:
    """Escaped pieces shared by every branch"""
    title: str
    attribution: Optional[str]
    body: str
    image_src: Optional[str]
    theme: str


ARCHIVE_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml" xmlns:epub="http://www.idpf.org/2007/ops" xml:lang="{lang}" lang="{lang}">
<head>
  <title>{title}</title>
  <link rel="stylesheet" type="text/css" href="{stylesheet}"/>
</head>
<body class="theme-{theme}">
  <div class="poem-container flow-{flow}">
{blocks}
  </div>
</body>
</html>
"""


class ContentDocumentRenderer(BaseRenderer):
    """
    Renders single works.

    Usage:
        renderer = ContentDocumentRenderer(language="zh-CN")
        doc = renderer.render(record, classifier.classify(record.content),
                              RenderTarget.ARCHIVE, index=0)
        doc.markup, doc.asset
    """

    def __init__(
        self,
        embedder: Optional[AssetEmbedder] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.embedder = embedder or AssetEmbedder()

        Handler = Callable[[PoemRecord, FlowVariant, _Parts], str]
        self._dispatch: Dict[Tuple[RenderTarget, FlowVariant], Handler] = {
            (RenderTarget.ARCHIVE, FlowVariant.LONG_FORM): self._render_archive,
            (RenderTarget.ARCHIVE, FlowVariant.SHORT_VERTICAL): self._render_archive,
            (RenderTarget.ARCHIVE, FlowVariant.SHORT_HORIZONTAL): self._render_archive,
            (RenderTarget.PRINT, FlowVariant.LONG_FORM): self._render_print_long,
            (RenderTarget.PRINT, FlowVariant.SHORT_VERTICAL): self._render_print_short,
            (RenderTarget.PRINT, FlowVariant.SHORT_HORIZONTAL): self._render_print_short,
            (RenderTarget.SCREEN, FlowVariant.SHORT_VERTICAL): self._render_screen,
            (RenderTarget.SCREEN, FlowVariant.SHORT_HORIZONTAL): self._render_screen,
        }

    def render(
        self,
        record: PoemRecord,
        classification: Classification,
        target: RenderTarget,
        index: int = 0,
    ) -> ContentDocument:
        """
        Render one work.

        Args:
            record: The work
            classification: LayoutClassifier result for record.content
            target: Render target
            index: Position of the record in the collection

        Returns:
            ContentDocument with markup and the embedded image, if any

        Raises:
            UnsupportedAsset: image payload cannot be embedded
        """
        flow = self.resolve_flow(record, classification, target)
        handler = self._dispatch[(target, flow)]

        asset = None
        if record.has_image:
            asset = self.embedder.embed(record.image_url, index)

        attribution = self.attribution(record)
        parts = _Parts(
            title=self._escape_html(self.display_title(record)),
            attribution=self._escape_html(attribution) if attribution else None,
            body=self.body_lines_html(record.content),
            image_src=self._image_src(asset, target),
            theme=record.theme.value,
        )

        logger.debug(f"Rendering {record.id!r} for {target.value} as {flow.value}")

        return ContentDocument(
            record_id=record.id,
            index=index,
            title=self.display_title(record),
            target=target,
            flow=flow,
            markup=handler(record, flow, parts),
            asset=asset,
        )

    @staticmethod
    def resolve_flow(
        record: PoemRecord,
        classification: Classification,
        target: RenderTarget,
    ) -> FlowVariant:
        """Screens scroll, so only paged targets honour the long-form override"""
        if target == RenderTarget.SCREEN:
            if record.layout == LayoutMode.VERTICAL:
                return FlowVariant.SHORT_VERTICAL
            return FlowVariant.SHORT_HORIZONTAL
        return classification.flow_for(record.layout)

    def _image_src(self, asset: Optional[EmbeddedAsset], target: RenderTarget) -> Optional[str]:
        if asset is None:
            return None
        if target == RenderTarget.ARCHIVE:
            return self._escape_html(asset.href)
        return self._escape_html(asset.source_uri)

    # ------------------------------------------------------------------
    # Archive
    # ------------------------------------------------------------------

    def _render_archive(self, record: PoemRecord, flow: FlowVariant, parts: _Parts) -> str:
        blocks = []
        if parts.image_src:
            blocks.append(
                f'<div class="image-wrapper"><img src="{parts.image_src}" class="poem-image" alt="illustration"/></div>'
            )

        heading = [f'<h2 class="poem-title">{parts.title}</h2>']
        if parts.attribution:
            heading.append(f'<div class="poem-author">{parts.attribution}</div>')
        body = f'<div class="poem-content">{parts.body}</div>'

        if flow == FlowVariant.SHORT_VERTICAL:
            blocks.append('<div class="vertical-frame">' + "".join(heading) + body + '</div>')
        else:
            blocks.extend(heading)
            blocks.append(body)

        return ARCHIVE_TEMPLATE.format(
            lang=self._escape_html(self.language),
            title=parts.title,
            stylesheet=STYLESHEET,
            theme=parts.theme,
            flow=flow.value,
            blocks="\n".join(f"    {block}" for block in blocks),
        )

    # ------------------------------------------------------------------
    # Print
    # ------------------------------------------------------------------

    def _print_image(self, parts: _Parts) -> str:
        if not parts.image_src:
            return ""
        return f'<figure class="poem-image"><img src="{parts.image_src}" alt="illustration"/></figure>'

    def _seal(self) -> str:
        return '<div class="seal">墨韵</div>'

    def _render_print_long(self, record: PoemRecord, flow: FlowVariant, parts: _Parts) -> str:
        attribution = f'<p class="poem-author">{parts.attribution}</p>' if parts.attribution else ""
        return (
            f'<article class="poem poem-long theme-{parts.theme}">'
            f'{self._print_image(parts)}'
            f'<div class="poem-column">'
            f'<h2 class="poem-title">{parts.title}</h2>'
            f'{attribution}'
            f'<div class="poem-body">{parts.body}</div>'
            f'</div>'
            f'{self._seal()}'
            f'</article>'
        )

    def _render_print_short(self, record: PoemRecord, flow: FlowVariant, parts: _Parts) -> str:
        orientation = "vertical" if flow == FlowVariant.SHORT_VERTICAL else "horizontal"
        attribution = f'<p class="poem-author">{parts.attribution}</p>' if parts.attribution else ""
        return (
            f'<article class="poem poem-short orientation-{orientation} theme-{parts.theme}">'
            f'{self._print_image(parts)}'
            f'<div class="poem-frame">'
            f'<div class="poem-heading"><h2 class="poem-title">{parts.title}</h2>{attribution}</div>'
            f'<div class="poem-body">{parts.body}</div>'
            f'</div>'
            f'{self._seal()}'
            f'</article>'
        )

    # ------------------------------------------------------------------
    # Screen
    # ------------------------------------------------------------------

    def _render_screen(self, record: PoemRecord, flow: FlowVariant, parts: _Parts) -> str:
        orientation = "vertical" if flow == FlowVariant.SHORT_VERTICAL else "horizontal"
        image = (
            f'<div class="poem-image"><img src="{parts.image_src}" alt="illustration"/></div>'
            if parts.image_src else ""
        )
        attribution = f'<div class="poem-author">{parts.attribution}</div>' if parts.attribution else ""
        anchor = self._escape_html(f"poem-{record.id}")
        return (
            f'<section id="{anchor}" class="page-container orientation-{orientation} theme-{parts.theme}">'
            f'{image}'
            f'<div class="poem-frame">'
            f'<h2 class="poem-title">{parts.title}</h2>'
            f'{attribution}'
            f'<div class="poem-body">{parts.body}</div>'
            f'</div>'
            f'<nav class="poem-nav"><a href="#toc">↑ Contents</a> • <a href="#top">↑ Cover</a></nav>'
            f'</section>'
        )

    @classmethod
    def supports_target(cls, target: RenderTarget) -> bool:
        return target in (RenderTarget.ARCHIVE, RenderTarget.PRINT, RenderTarget.SCREEN)
