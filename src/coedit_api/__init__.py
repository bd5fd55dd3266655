"""Coedit API: organizations, sessions and org-scoped collaborative documents."""

__version__ = "0.1.0"
