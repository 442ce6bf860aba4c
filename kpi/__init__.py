"""Pure KPI data-bar package.

This package turns one annotated data row into a validated `BarModel` and
derives everything a renderer needs from it (status, geometry, tooltip rows).
It must not import Django or perform any I/O; formatting is injected.
"""

from .extraction import extract_bar_model

__all__ = ["extract_bar_model"]
