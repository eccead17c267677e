"""Textual front-end for Snap."""

from .app import SnapTextualApp, run_textual_app

__all__ = ["SnapTextualApp", "run_textual_app"]
