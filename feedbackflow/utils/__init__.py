"""Utilities package."""

from .hierarchy import HierarchyResult, build_hierarchy, mark_orphan
from .sanitizer import sanitize

__all__ = ["HierarchyResult", "build_hierarchy", "mark_orphan", "sanitize"]
