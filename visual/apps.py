"""App configuration for the visual Django app."""

from __future__ import annotations

from django.apps import AppConfig


class VisualConfig(AppConfig):
    """Configuration for the `visual` app."""

    name = "visual"
    verbose_name = "Data bar visual"
