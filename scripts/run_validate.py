#!/usr/bin/env python3
"""
CLI script for layout validation
Script CLI para validacion de disenos
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from formtext.errors import FormTextError
from formtext.layout_loader import build_page, list_available_layouts, load_layout
from formtext.layout_validator import validate_layout


def check_layout(layout_id: str, preview: bool = False) -> bool:
    """
    Validate a layout configuration
    Validar configuracion de un diseno

    Args:
        layout_id: ID of the layout to validate
        preview: Print the exported text of the empty form

    Returns:
        True if valid, False otherwise
    """
    print(f"\n{'='*60}")
    print(f"Validating layout: {layout_id}")
    print(f"{'='*60}")

    layout = load_layout(layout_id)
    result = validate_layout(layout)

    print("\n[Manifest]")
    for key in ("layout_id", "name", "version"):
        if key in layout.manifest:
            print(f"  {key}: {layout.manifest[key]}")

    print("\n[Items]")
    print(f"  Top-level items: {len(layout.get_items())}")

    if result.is_valid:
        # Build to surface descriptor errors
        try:
            page = build_page(layout)
            print(f"  Tracked fields: {len(page.state)}")
            if preview:
                print("\n[Preview]")
                print(page.format_text(page.get_form_text()))
        except (FormTextError, ValueError) as e:
            result.add_error("build", f"Error building page: {e}", "build")

    # Print results
    print(f"\n{'='*60}")
    print("Validation Results")
    print(f"{'='*60}")

    if result.errors:
        print(f"\nERRORS ({len(result.errors)}):")
        for err in result.errors:
            print(f"  [X] {err.path}: {err.message}")

    if result.warnings:
        print(f"\nWARNINGS ({len(result.warnings)}):")
        for warn in result.warnings:
            print(f"  [!] {warn.path}: {warn.message}")

    if result.errors:
        print(f"\n[FAIL] Layout has {len(result.errors)} error(s)")
        return False

    if result.warnings:
        print(f"\n[OK] Layout is valid with {len(result.warnings)} warning(s)")
    else:
        print("\n[OK] Layout is valid with no issues!")
    return True


def main():
    """Main CLI entry point / Punto de entrada CLI principal"""
    parser = argparse.ArgumentParser(
        description="Validate form layout configurations"
    )

    parser.add_argument(
        "--layout",
        "-l",
        help="Layout ID to validate (validates all if not specified)"
    )

    parser.add_argument(
        "--list",
        action="store_true",
        help="List available layouts"
    )

    parser.add_argument(
        "--preview",
        "-p",
        action="store_true",
        help="Print the exported text of the freshly built form"
    )

    args = parser.parse_args()

    if args.list:
        print("Available layouts:")
        for layout_id in list_available_layouts():
            print(f"  - {layout_id}")
        return 0

    if args.layout:
        return 0 if check_layout(args.layout, args.preview) else 1

    layouts = list_available_layouts()
    if not layouts:
        print("No layouts found!")
        return 1

    all_valid = True
    for layout_id in layouts:
        if not check_layout(layout_id, args.preview):
            all_valid = False

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
