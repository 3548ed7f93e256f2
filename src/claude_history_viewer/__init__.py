"""Claude History Viewer: transcript ingestion, search and analytics."""

__version__ = "0.1.0"
