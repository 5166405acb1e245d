"""
Ink & Verse publication export.

Turns a poem collection into an EPUB 3 archive, a paginated print book
or a standalone HTML book.
"""

__version__ = "1.0.0"
