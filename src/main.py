"""
1) Load the herd's animal records from a JSON export.
2) Build the pedigree graph (sire/dam links).
3) Either number and validate the pedigree of one root animal and lay it out
   by generation bands, or lay out the visible scope of a selection with dot.
4) Color edges by lineage and write the render-ready layout as JSON.
"""

import argparse
import json
import logging
from pathlib import Path
import sys

from coloring import color_edges, color_mode_for, sire_index
from config import settings
from dot_layout import LayoutEngineError, compute_multi_root_layout
from graph import build_graph, find_common_ancestors
from layout import compute_layout
from models import LayoutResult
from parsing import load_animals
from pedigree import convert_animals_to_pedigree
from validation import validate_pedigree

MAX_WARNINGS_SHOWN = 10


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pedigree-layout",
        description="Compute a pedigree diagram layout from a herd export.",
    )
    parser.add_argument("animals", type=Path, help="JSON file with the animal records")
    scope = parser.add_mutually_exclusive_group(required=True)
    scope.add_argument("--root", help="Animal id for a generation-banded pedigree")
    scope.add_argument(
        "--select",
        action="append",
        metavar="ID",
        help="Selected animal id for a multi-root layout (repeatable)",
    )
    parser.add_argument(
        "--max-generations",
        type=int,
        default=settings.max_generations,
        help=f"Generations shown around a selection (default {settings.max_generations})",
    )
    parser.add_argument(
        "--no-descendants",
        action="store_true",
        help="Only show ancestors of the selection",
    )
    parser.add_argument("--output", "-o", type=Path, help="Write the layout here instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def print_warnings(warnings: list[str]):
    if warnings:
        print(f"  Found {len(warnings)} validation warnings:", file=sys.stderr)
        for w in warnings[:MAX_WARNINGS_SHOWN]:
            print(f"    - {w}", file=sys.stderr)
        if len(warnings) > MAX_WARNINGS_SHOWN:
            print(f"    ... and {len(warnings) - MAX_WARNINGS_SHOWN} more", file=sys.stderr)
    else:
        print("  No validation issues found", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print(f"Loading animals: {args.animals}", file=sys.stderr)
    animals = load_animals(args.animals)
    print(f"  Found {len(animals)} animals", file=sys.stderr)

    graph = build_graph(animals)
    config = settings.layout_config()

    if args.root:
        root = next((a for a in animals if a.id == args.root), None)
        if root is None:
            print(f"Root animal {args.root} not found", file=sys.stderr)
            return 2

        print(f"Numbering pedigree of {root.name}...", file=sys.stderr)
        data = convert_animals_to_pedigree(root, animals)
        print(f"  {len(data.subjects)} subjects in the pedigree", file=sys.stderr)

        print("Validating pedigree...", file=sys.stderr)
        print_warnings(validate_pedigree(data))

        layout = compute_layout(data, config)
        selected: list[str] = []
    else:
        selected = list(dict.fromkeys(args.select))
        if len(selected) > 1:
            common = find_common_ancestors(selected, graph, settings.common_ancestor_generations)
            print(f"  {len(common)} common ancestors", file=sys.stderr)

        print("Running layered layout...", file=sys.stderr)
        try:
            layout = compute_multi_root_layout(
                selected,
                animals,
                max_generations=args.max_generations,
                include_descendants=not args.no_descendants,
                config=config,
            )
        except LayoutEngineError as exc:
            print(f"  Layout failed ({exc}); no subjects to display", file=sys.stderr)
            layout = LayoutResult.empty()

    mode = color_mode_for(selected)
    layout.edges = color_edges(layout.edges, mode, graph, sire_index(animals))
    print(f"  {len(layout.nodes)} nodes, {len(layout.edges)} edges", file=sys.stderr)

    payload = json.dumps(layout.to_dict(), indent=2)
    if args.output:
        args.output.write_text(payload + "\n", encoding="utf-8")
        print(f"Layout saved to {args.output}", file=sys.stderr)
    else:
        print(payload)

    return 0


if __name__ == "__main__":
    sys.exit(main())
