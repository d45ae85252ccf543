"""Textual graph rendering."""

from repodeps.core.render.dot import REPOSITORY_PALETTE, quote, render, repository_fills

__all__ = ["REPOSITORY_PALETTE", "quote", "render", "repository_fills"]
