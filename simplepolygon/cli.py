from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from simplepolygon.decomposition.graph import GraphConsistencyError
from simplepolygon.decomposition.pipeline import DecomposeConfig
from simplepolygon.decomposition.rings import InvalidPolygonError
from simplepolygon.io.geojson import decompose_feature, load_feature


def _cmd_decompose(args: argparse.Namespace) -> int:
    in_path = Path(args.file).expanduser().resolve()
    if not in_path.exists():
        print(f"[ERROR] File not found: {in_path}")
        print("        Provide a path to a GeoJSON Polygon Feature.")
        return 2
    if not in_path.is_file():
        print(f"[ERROR] Not a file: {in_path}")
        return 2

    config = DecomposeConfig(verify_parents=bool(args.verify_parents), auto_close=not args.strict_rings)
    try:
        result = decompose_feature(load_feature(in_path), config)
    except (InvalidPolygonError, GraphConsistencyError) as exc:
        print(f"[ERROR] {exc}")
        return 3

    text = json.dumps(result, indent=args.indent)
    if args.out:
        out_path = Path(args.out).expanduser().resolve()
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text + "\n", encoding="utf-8")
        print(f"Saved {len(result['features'])} simple polygon(s) to: {out_path}")
    else:
        print(text)
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="simplepolygon")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Log progress (-vv for walk details)")
    sub = p.add_subparsers(dest="cmd", required=True)

    d = sub.add_parser("decompose", help="Split a self-intersecting GeoJSON polygon into simple polygons.")
    d.add_argument("file", help="Path to a GeoJSON Feature with Polygon geometry")
    d.add_argument("--out", default=None, help="Output FeatureCollection path (default: stdout)")
    d.add_argument("--verify-parents", action="store_true", help="Re-derive every parent ring by containment")
    d.add_argument("--strict-rings", action="store_true", help="Reject rings that are not closed")
    d.add_argument("--indent", type=int, default=None, help="JSON indentation")
    d.set_defaults(func=_cmd_decompose)

    args = p.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG if args.verbose > 1 else logging.INFO)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
