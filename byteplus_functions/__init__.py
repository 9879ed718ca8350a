"""Cloud Functions backing the BytePlus mobile ordering app."""

__version__ = "1.0.0"
