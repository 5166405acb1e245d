"""
Renderers

- ContentDocumentRenderer: one work, dispatched on (target, flow variant)
- HtmlBookRenderer: whole collection as one screen HTML page
- styles: stylesheets for archive, print and screen
"""

from .base_renderer import BaseRenderer, RenderTarget, escape_text
from .styles import ARCHIVE_CSS, SCREEN_CSS, print_css
from .content_renderer import ContentDocument, ContentDocumentRenderer
from .html_book import HtmlBookRenderer

__all__ = [
    "BaseRenderer",
    "RenderTarget",
    "escape_text",
    "ARCHIVE_CSS",
    "SCREEN_CSS",
    "print_css",
    "ContentDocument",
    "ContentDocumentRenderer",
    "HtmlBookRenderer",
]
