"""Command line tools and configuration helpers."""
