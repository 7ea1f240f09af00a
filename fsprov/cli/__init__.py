"""Command line interface for fsprov."""
