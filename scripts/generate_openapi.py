#!/usr/bin/env python3
"""
OpenAPI specification generator for the TV catalog API.

This script writes the OpenAPI 3 document built from the routing table and the
pydantic entity schemas, as YAML or JSON.
"""

import argparse
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

import yaml

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tvapi import __version__  # noqa: E402
from tvapi.handlers.utils.openapi import build_openapi_spec  # noqa: E402
from tvapi.models.entity import ENTITY_DEFINITIONS  # noqa: E402


def validate_openapi_spec(spec: Dict[str, Any]) -> bool:
    """
    Validate the basic structure of the OpenAPI specification.

    Args:
        spec: OpenAPI specification to validate

    Returns:
        True if valid, False otherwise
    """
    for field in ("openapi", "info", "paths"):
        if field not in spec:
            print(f"Error: Missing required field '{field}' in OpenAPI spec")
            return False

    for field in ("title", "version"):
        if field not in spec["info"]:
            print(f"Error: Missing required field 'info.{field}' in OpenAPI spec")
            return False

    if not spec["openapi"].startswith("3."):
        print(f"Warning: OpenAPI version '{spec['openapi']}' is not 3.x")

    print("OpenAPI specification validation passed")
    return True


def main():
    """Main function for the OpenAPI generator script."""
    parser = argparse.ArgumentParser(
        description="Generate OpenAPI specification for the TV catalog API"
    )
    parser.add_argument(
        "--format",
        choices=["json", "yaml"],
        default="yaml",
        help="Output format (default: yaml)"
    )
    parser.add_argument(
        "--entity",
        choices=sorted(ENTITY_DEFINITIONS),
        action="append",
        help="Entity type to document; repeat for several (default: all)"
    )
    parser.add_argument(
        "--out-destination",
        default=".",
        help="Output directory (default: current directory)"
    )
    parser.add_argument(
        "--out-filename",
        help="Output filename (default: openapi.{format})"
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate the generated specification"
    )

    args = parser.parse_args()

    names = args.entity or sorted(ENTITY_DEFINITIONS)
    spec = build_openapi_spec([ENTITY_DEFINITIONS[name] for name in names], version=__version__)
    spec["info"]["x-generated"] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "generator": "tv-catalog-api/openapi-generator",
    }

    if args.validate and not validate_openapi_spec(spec):
        sys.exit(1)

    output_dir = Path(args.out_destination)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / (args.out_filename or f"openapi.{args.format}")

    with open(output_path, "w", encoding="utf-8") as f:
        if args.format == "json":
            json.dump(spec, f, indent=2, ensure_ascii=False)
        else:
            yaml.dump(spec, f, default_flow_style=False, allow_unicode=True, sort_keys=False)

    operations = sum(
        len([k for k in path_obj if k in ("get", "post", "put", "delete")])
        for path_obj in spec["paths"].values()
    )
    print(f"OpenAPI specification written to: {output_path}")
    print(f"Paths: {len(spec['paths'])}, operations: {operations}, schemas: {len(spec['components']['schemas'])}")


if __name__ == "__main__":
    main()
