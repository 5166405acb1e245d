"""
Layout executors: turn rendered works into paged output.
"""

from .print_paginator import (
    PageState,
    PrintBlock,
    PrintBlockKind,
    PrintDocument,
    PrintPaginator,
)

__all__ = [
    "PageState",
    "PrintBlock",
    "PrintBlockKind",
    "PrintDocument",
    "PrintPaginator",
]
