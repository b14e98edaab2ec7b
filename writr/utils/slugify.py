#!/usr/bin/env python3
"""
slugify.py
----------
Slug generation for backup filenames.

Usage:
    from writr.utils.slugify import slugify

    slugify("My Novel: Part 1")  # "my-novel-part-1"
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """
    Convert a title to a filename-safe slug.

    Lowercases, collapses every run of characters outside [a-z0-9] into a
    single hyphen, and trims hyphens from both ends. Non-ASCII letters are
    treated as separators, so a title made only of them yields "".

    Examples:
        >>> slugify("Test Novel")
        'test-novel'
        >>> slugify("  --Hello,  World!--  ")
        'hello-world'
    """
    return _NON_ALNUM.sub("-", text.lower()).strip("-")
