"""Example: Price a menu from a JSON snapshot

This example loads an entity snapshot (ingredients, recipes, sizes, base
templates, overhead and sale prices), runs a pricing pass and prints the
per-size and overall store averages. Optionally it writes the recipe
pricing and ingredient CSV exports.

Usage:
    python examples/pricing_matrix_example.py
    python examples/pricing_matrix_example.py --snapshot my_store.json --export-dir out/
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from menu_costing import CostingConfig, load_snapshot, run_pricing
from menu_costing.export import export_ingredients, export_recipes_pricing
from menu_costing.formatters import format_averages_for_console, format_matrix_for_console

DEFAULT_SNAPSHOT = Path(__file__).parent / "sample_snapshot.json"


def main() -> None:
    parser = argparse.ArgumentParser(description="Run a menu pricing pass on a JSON snapshot.")
    parser.add_argument("--snapshot", type=Path, default=DEFAULT_SNAPSHOT, help="Snapshot JSON file")
    parser.add_argument("--export-dir", type=Path, default=None, help="Write CSV exports to this directory")
    parser.add_argument("--healthy-above", type=float, default=31.0, help="Healthy margin threshold (%%)")
    parser.add_argument("--watch-from", type=float, default=25.0, help="Watch margin threshold (%%)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    snapshot = load_snapshot(args.snapshot)
    config = CostingConfig(healthy_margin_above=args.healthy_above, watch_margin_from=args.watch_from)
    result = run_pricing(snapshot, config=config)

    print("=" * 80)
    print(f"Overhead: ${result.metadata['monthly_overhead']:,.2f}/month, "
          f"${result.metadata['cost_per_minute']:.4f}/minute")
    print("=" * 80)
    print(format_matrix_for_console(result.matrix))
    print()
    print(format_averages_for_console(result))

    if args.export_dir is not None:
        recipes_csv = export_recipes_pricing(result.matrix, args.export_dir / "recipes_pricing.csv")
        ingredients_csv = export_ingredients(snapshot, args.export_dir / "ingredients.csv")
        print(f"\nSaved recipe pricing to: {recipes_csv}")
        print(f"Saved ingredients to: {ingredients_csv}")


if __name__ == "__main__":
    main()
