#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Base Renderer Interface

Defines the render targets and the helpers every renderer shares:
escaping, placeholders and hard line breaks.

Version: 1.0.0
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional
import html
import re

from config.constants import ANONYMOUS_PLACEHOLDER, DEFAULT_LANGUAGE, UNTITLED_PLACEHOLDER
from inkverse.contracts import PoemRecord

# Code points XML 1.0 does not allow in character data
_XML_ILLEGAL = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def escape_text(text: str) -> str:
    """Escape markup characters and drop code points XML 1.0 rejects"""
    return html.escape(_XML_ILLEGAL.sub("", text), quote=True)


class RenderTarget(Enum):
    """Where a rendered work ends up"""
    ARCHIVE = "archive"  # XHTML content document inside the EPUB
    PRINT = "print"      # block of the paginated print book
    SCREEN = "screen"    # section of the standalone HTML book


class BaseRenderer(ABC):
    """
    Abstract base class for renderers.

    All renderers must implement:
    - render(): Main rendering method
    - supports_target(): Check if target is supported
    """

    def __init__(
        self,
        language: str = DEFAULT_LANGUAGE,
        untitled: str = UNTITLED_PLACEHOLDER,
        anonymous: str = ANONYMOUS_PLACEHOLDER,
    ):
        """
        Initialize renderer.

        Args:
            language: Document language (BCP 47)
            untitled: Text shown for works without a title
            anonymous: Text shown in listings for works without an author
        """
        self.language = language
        self.untitled = untitled
        self.anonymous = anonymous

    @abstractmethod
    def render(self, *args, **kwargs):
        """Render to the target representation"""
        pass

    @classmethod
    @abstractmethod
    def supports_target(cls, target: RenderTarget) -> bool:
        """Check if renderer supports given target"""
        pass

    @classmethod
    def get_supported_targets(cls) -> List[RenderTarget]:
        """Get list of supported targets"""
        return [target for target in RenderTarget if cls.supports_target(target)]

    def display_title(self, record: PoemRecord) -> str:
        return record.title.strip() or self.untitled

    def display_author(self, record: PoemRecord) -> str:
        """Author for listings (TOC rows)"""
        return record.author.strip() or self.anonymous

    def attribution(self, record: PoemRecord) -> Optional[str]:
        """Attribution line under the title, None when there is no author"""
        author = record.author.strip()
        return f"— {author}" if author else None

    def body_lines_html(self, content: str) -> str:
        """
        Escape the body and end every line with a hard break.

        Line endings are normalized and blank lines around the body are
        dropped; everything in between, including blank lines and
        indentation, is kept as written.
        """
        text = content.replace("\r\n", "\n").replace("\r", "\n").strip("\n")
        if not text.strip():
            return ""
        return "".join(f"{self._escape_html(line)}<br/>" for line in text.split("\n"))

    def _escape_html(self, text: str) -> str:
        """Escape HTML entities"""
        return escape_text(text)
