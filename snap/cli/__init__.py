"""Command line interface for Snap."""
