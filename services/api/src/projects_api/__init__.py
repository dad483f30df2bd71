"""Projects API service."""
