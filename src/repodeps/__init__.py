"""repodeps: Cross-repository package dependency graphs and lints."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
