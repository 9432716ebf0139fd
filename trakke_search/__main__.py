"""Command-line search, mainly for trying queries against the live registries.

    python -m trakke_search "Preikestolen"
    python -m trakke_search "59.90, 10.75" --pois pois.json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .api import search
from .config import configure_logging, get_config
from .domain.models import PointOfInterest


def load_pois(path: Path) -> List[PointOfInterest]:
    """Load points of interest from a JSON array of objects."""
    with path.open(encoding="utf-8") as f:
        records = json.load(f)
    return [
        PointOfInterest(
            id=str(record["id"]),
            name=record["name"],
            description=record.get("description", ""),
            lat=float(record["lat"]),
            lng=float(record["lng"]),
            kind=record.get("type", record.get("kind", "")),
        )
        for record in records
    ]


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="trakke-search", description=__doc__.splitlines()[0])
    parser.add_argument("query", help="place name, address or coordinate")
    parser.add_argument("--pois", type=Path, help="JSON file with points of interest")
    parser.add_argument("--log-level", help="override TRAKKE_LOG_LEVEL")
    args = parser.parse_args(argv)

    observability = get_config().observability
    if args.log_level:
        observability = observability.model_copy(update={"level": args.log_level})
    configure_logging(observability)

    try:
        pois = load_pois(args.pois) if args.pois else []
    except (OSError, ValueError, KeyError) as e:
        print(f"Could not read POIs from {args.pois}: {e}", file=sys.stderr)
        return 1

    results = asyncio.run(search(args.query, pois))
    if not results:
        print("No results.")
        return 0

    for rank, result in enumerate(results, start=1):
        print(
            f"{rank:2d}. [{result.kind.value}] {result.display_name} "
            f"({result.lat:.5f}, {result.lng:.5f}) via {result.source.value}"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
