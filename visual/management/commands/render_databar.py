"""Render a data bar from a JSON payload and write it to stdout."""

from __future__ import annotations

import json
import logging
import math
import sys
from dataclasses import asdict
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from kpi.coercion import number_to_string
from kpi.options import SettingsError, parse_visual_settings
from visual.dataview import DataViewError, parse_data_view
from visual.render import RenderedDatabar, Viewport, default_viewport, default_visual_settings, render_databar

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Run one data bar update cycle for a payload file (or stdin)."""

    help = (
        "Render a data bar from a JSON payload with 'columns', 'rows' and optional "
        "'objects' (visual settings). Writes SVG or JSON to stdout."
    )

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument(
            "input",
            nargs="?",
            default="-",
            help="Path to the JSON payload, or '-' to read stdin (default).",
        )
        parser.add_argument("--width", type=float, default=None, help="Canvas width in pixels.")
        parser.add_argument("--height", type=float, default=None, help="Canvas height in pixels.")
        parser.add_argument(
            "--output-format",
            choices=("svg", "json"),
            default="svg",
            help="Write the SVG markup or a JSON description of the cycle.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        payload = self._load_payload(options["input"])
        try:
            data_view = parse_data_view(payload)
            settings = parse_visual_settings(payload.get("objects"), base=default_visual_settings())
        except (DataViewError, SettingsError) as exc:
            raise CommandError(str(exc)) from exc

        viewport = default_viewport()
        viewport = Viewport(
            width=options["width"] if options["width"] is not None else viewport.width,
            height=options["height"] if options["height"] is not None else viewport.height,
        )
        if viewport.width <= 0 or viewport.height <= 0:
            raise CommandError("--width and --height must be positive.")

        rendered = render_databar(data_view=data_view, settings=settings, viewport=viewport)
        if rendered.status_message:
            logger.warning("Data bar not drawn: %s", rendered.status_message)

        if options["output_format"] == "json":
            self.stdout.write(json.dumps(_describe(rendered), indent=2, allow_nan=False))
        else:
            self.stdout.write(rendered.svg)
        return None

    def _load_payload(self, source: str) -> dict:
        try:
            if source == "-":
                text = sys.stdin.read()
            else:
                text = Path(source).read_text(encoding="utf-8")
        except OSError as exc:
            raise CommandError(f"Could not read payload from {source!r}: {exc}") from exc
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise CommandError(f"Payload is not valid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise CommandError("Payload must be a JSON object.")
        return payload


def _describe(rendered: RenderedDatabar) -> dict:
    """Return a JSON-serializable description of a rendered cycle."""

    return {
        "statusMessage": rendered.status_message,
        "statusColor": rendered.status_color,
        "layout": _finite_layout(asdict(rendered.layout)) if rendered.layout is not None else None,
        "tooltip": [{"displayName": item.display_name, "value": item.value} for item in rendered.tooltip],
    }


def _finite_layout(layout: dict) -> dict:
    """Replace NaN and infinities with `NaN`, `Infinity` and `-Infinity` strings."""

    return {
        key: number_to_string(value) if isinstance(value, float) and not math.isfinite(value) else value
        for key, value in layout.items()
    }
