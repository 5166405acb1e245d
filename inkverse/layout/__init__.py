#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Layout Module

Chooses the flow for every work and renders it for each target.

Components:
- LayoutClassifier: long/short decision per work
- ContentDocumentRenderer: one work for archive, print or screen
- HtmlBookRenderer: standalone HTML book
- PrintPaginator: print book with one page block per work

Usage:
    from inkverse.layout import PrintPaginator

    document = PrintPaginator(page_size="A4").paginate(collection)
    html_text = document.to_html()

Version: 1.0.0
"""

from .classifier import Classification, FlowVariant, LayoutClassifier
from .renderer import (
    BaseRenderer,
    ContentDocument,
    ContentDocumentRenderer,
    HtmlBookRenderer,
    RenderTarget,
)
from .executor import PrintBlock, PrintBlockKind, PrintDocument, PrintPaginator, PageState

__all__ = [
    "Classification",
    "FlowVariant",
    "LayoutClassifier",
    "BaseRenderer",
    "ContentDocument",
    "ContentDocumentRenderer",
    "HtmlBookRenderer",
    "RenderTarget",
    "PageState",
    "PrintBlock",
    "PrintBlockKind",
    "PrintDocument",
    "PrintPaginator",
]

__version__ = "1.0.0"
