#!/usr/bin/env python
"""
Command-line interface for placegeo

Usage:
    python cli.py process --input overpass.json --output places.json
    python cli.py fetch --bbox 43.4,3.2,44.4,4.8 --output places.json
    python cli.py ids --ids 12345,67890 --output places.json
"""

import os
import sys
import json
import argparse
from datetime import datetime

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from loguru import logger
from placegeo.collectors.overpass import FeatureProcessor, OverpassCollector
from placegeo.records import BoundingBox


def setup_logging(verbose: bool = False):
    """Configure logging"""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
        level=level
    )


def save_features(features, output_path: str):
    """Write processed places as a JSON list"""
    output_dir = os.path.dirname(output_path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump([feature.to_dict() for feature in features], f, indent=2, ensure_ascii=False)
    logger.info(f"✓ Wrote {len(features)} places to {output_path}")


def print_summary(features):
    counts = {}
    for feature in features:
        geom_type = feature.geometry.type if feature.geometry else "none"
        key = f"{feature.category}/{geom_type}"
        counts[key] = counts.get(key, 0) + 1
    print(json.dumps(dict(sorted(counts.items())), indent=2))


def default_output() -> str:
    return f"places_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"


def cmd_process(args):
    """Process a saved Overpass response without touching the network"""
    setup_logging(args.verbose)

    if not os.path.exists(args.input):
        logger.error(f"Input file not found: {args.input}")
        return 1

    try:
        with open(args.input, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read {args.input}: {e}")
        return 1

    processor = FeatureProcessor()
    features = processor.process_elements(data)
    save_features(features, args.output or default_output())

    if args.summary:
        print_summary(features)
    return 0


def cmd_fetch(args):
    """Fetch and process places in a bounding box"""
    setup_logging(args.verbose)

    try:
        bbox = BoundingBox.parse(args.bbox)
    except ValueError as e:
        logger.error(f"Invalid bounding box: {e}")
        return 1

    collector = OverpassCollector(cache_dir=args.cache_dir)
    try:
        features = collector.collect(bbox, cache_key=args.cache_key, refresh=args.refresh)
    except RuntimeError as e:
        logger.error(f"Failed to fetch places: {e}")
        return 1

    save_features(features, args.output or default_output())
    logger.info(f"API requests: {collector.api_client.request_count}")

    if args.summary:
        print_summary(features)
    return 0


def cmd_ids(args):
    """Fetch and process specific OSM elements by id"""
    setup_logging(args.verbose)

    try:
        ids = [int(i) for i in args.ids.split(",") if i.strip()]
    except ValueError as e:
        logger.error(f"Invalid id list: {e}")
        return 1
    if not ids:
        logger.error("No ids given")
        return 1

    collector = OverpassCollector(cache_dir=args.cache_dir)
    features = collector.collect_by_ids(ids, batch_size=args.batch_size)
    save_features(features, args.output or default_output())

    if args.summary:
        print_summary(features)
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="placegeo CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Process a saved Overpass response:
    python cli.py process --input overpass.json --output places.json

  Fetch places for a bounding box (south,west,north,east):
    python cli.py fetch --bbox 43.4,3.2,44.4,4.8 --cache-dir temp/overpass

  Refresh specific elements:
    python cli.py ids --ids 12345,67890
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Process command
    process_parser = subparsers.add_parser("process", help="Process a saved Overpass JSON response")
    process_parser.add_argument("--input", "-i", required=True, help="Overpass JSON file")
    process_parser.add_argument("--output", "-o", help="Output JSON file")
    process_parser.add_argument("--summary", "-s", action="store_true", help="Print summary to stdout")
    process_parser.set_defaults(func=cmd_process)

    # Fetch command
    fetch_parser = subparsers.add_parser("fetch", help="Fetch places in a bounding box")
    fetch_parser.add_argument("--bbox", "-b", required=True, help="south,west,north,east in degrees")
    fetch_parser.add_argument("--output", "-o", help="Output JSON file")
    fetch_parser.add_argument("--cache-dir", help="Directory for raw Overpass responses")
    fetch_parser.add_argument("--cache-key", help="Cache key (defaults to the bbox)")
    fetch_parser.add_argument("--refresh", action="store_true", help="Ignore and replace the cached response")
    fetch_parser.add_argument("--summary", "-s", action="store_true", help="Print summary to stdout")
    fetch_parser.set_defaults(func=cmd_fetch)

    # Ids command
    ids_parser = subparsers.add_parser("ids", help="Fetch specific elements by OSM id")
    ids_parser.add_argument("--ids", required=True, help="Comma-separated OSM ids")
    ids_parser.add_argument("--output", "-o", help="Output JSON file")
    ids_parser.add_argument("--batch-size", type=int, default=None, help="Ids per Overpass request")
    ids_parser.add_argument("--cache-dir", help="Directory for raw Overpass responses")
    ids_parser.add_argument("--summary", "-s", action="store_true", help="Print summary to stdout")
    ids_parser.set_defaults(func=cmd_ids)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
