"""
Module: output

Purpose:
    Presentation surfaces receiving finished pages.

Key Classes:
    - PageSurface: Abstract append-only surface
    - PageStack: In-memory vertical page stack

Used By:
    - notes_pager.loading.loader: Source Loader
"""

from .surface import PageStack, PageSurface

__all__ = [
    "PageSurface",
    "PageStack",
]
