#!/usr/bin/env python3
"""Validate a YAML chart document.

This is a developer-facing gate script for authoring chart panels. It loads a
chart document, validates its configuration (against its column metadata when
the document carries data) and prints a JSON report that includes the
normalized camelCase form of the configuration.
"""

from __future__ import annotations

import argparse
import json
import logging

from core.charting.codec import ChartConfigError, encode_area_config
from core.charting.loader import load_chart_document
from core.charting.validator import validate_area_config

logger = logging.getLogger("core.charting")


def main(argv: list[str] | None = None) -> int:
    """Run the validator and print a JSON report."""

    parser = argparse.ArgumentParser(description="Validate a YAML chart document.")
    parser.add_argument("--config", required=True, help="Path to the YAML chart document.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        document = load_chart_document(args.config)
    except (OSError, ChartConfigError) as exc:
        logger.error("Could not load %s: %s", args.config, exc)
        print(json.dumps({"config": args.config, "is_valid": False, "errors": [str(exc)], "warnings": []}, indent=2))
        return 1

    result = validate_area_config(document.config, metadata=document.metadata)
    report = {
        "config": args.config,
        "is_valid": result.is_valid,
        "errors": list(result.errors),
        "warnings": list(result.warnings),
        "charts": len(document.config.charts),
        "rows": len(document.rows),
        "normalized": encode_area_config(document.config),
    }
    print(json.dumps(report, indent=2, sort_keys=True))
    return 0 if result.is_valid else 1


if __name__ == "__main__":
    raise SystemExit(main())
