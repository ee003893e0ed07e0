"""AuthorFlow API - project storage and tier enforcement for writers."""

__version__ = "0.1.0"
