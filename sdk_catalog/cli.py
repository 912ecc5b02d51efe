"""
sdk-catalog - browse SDK candidates and their local installation state.

Usage:
    sdk-catalog list                 # Candidates with local install status
    sdk-catalog versions java        # Versions of one candidate
    sdk-catalog local                # Local installations only (no network)
    sdk-catalog search kotlin        # Filter the catalog

Add --json to any command for machine-readable output.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from .catalog import CandidateCatalog
from .common import SdkCatalogError
from .config import load_config
from .logging_config import setup_logging
from .render import render_candidates, render_local, render_versions
from .service import SdkCatalogService

logger = logging.getLogger(__name__)


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _service(args: argparse.Namespace) -> SdkCatalogService:
    config = load_config(args.config, verbose=args.verbose)
    return SdkCatalogService(config, verbose=args.verbose)


def cmd_list(args: argparse.Namespace) -> int:
    """Refresh and list all candidates."""
    snapshot = _service(args).refresh()

    if args.json:
        _print_json(snapshot.to_dict())
        return 0

    print(render_candidates(snapshot.candidates))
    if snapshot.local_error:
        print(f"\n⚠ Local installations unavailable: {snapshot.local_error}", file=sys.stderr)
    for local in snapshot.local_only:
        print(f"# {local.binary_id} is installed locally but not in the catalog", file=sys.stderr)
    return 0


def cmd_search(args: argparse.Namespace) -> int:
    """List candidates matching a search term."""
    snapshot = _service(args).refresh()
    catalog = CandidateCatalog(c.candidate for c in snapshot.candidates)
    matches = {record.binary_id for record in catalog.search(args.term)}
    candidates = [c for c in snapshot.candidates if c.binary_id in matches]

    if args.json:
        _print_json([c.to_dict() for c in candidates])
        return 0

    if not candidates:
        print(f"No candidates match {args.term!r}", file=sys.stderr)
        return 1
    print(render_candidates(candidates))
    return 0


def cmd_versions(args: argparse.Namespace) -> int:
    """Show the versions of one candidate."""
    try:
        candidate = _service(args).select(args.candidate)
    except KeyError:
        print(f"✗ Unknown candidate: {args.candidate}", file=sys.stderr)
        return 1

    if args.json:
        _print_json(candidate.to_dict())
        return 0

    record = candidate.candidate
    print(f"{record.display_name} {record.default_version}  {record.homepage}")
    print(record.description.strip())
    print(record.install_command)
    print("")
    print(render_versions(candidate))
    return 0


def cmd_local(args: argparse.Namespace) -> int:
    """Show local installations without contacting the server."""
    scan = _service(args).scan_local()

    if args.json:
        _print_json(scan.to_dict())
    else:
        print(render_local(scan))
    return 1 if scan.partial else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sdk-catalog",
        description="Browse SDK candidates and their local installation state",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", help="Path to a YAML configuration file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only print warnings and errors")
    parser.add_argument("--log-file", help="Also write a debug log to this file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    p_list = subparsers.add_parser("list", help="List all candidates")
    p_list.add_argument("--json", action="store_true", help="JSON output")
    p_list.set_defaults(func=cmd_list)

    p_search = subparsers.add_parser("search", help="Search candidates")
    p_search.add_argument("term", help="Text to look for in names and descriptions")
    p_search.add_argument("--json", action="store_true", help="JSON output")
    p_search.set_defaults(func=cmd_search)

    p_versions = subparsers.add_parser("versions", help="List versions of a candidate")
    p_versions.add_argument("candidate", help="Candidate binary id (e.g. java)")
    p_versions.add_argument("--json", action="store_true", help="JSON output")
    p_versions.set_defaults(func=cmd_versions)

    p_local = subparsers.add_parser("local", help="List local installations")
    p_local.add_argument("--json", action="store_true", help="JSON output")
    p_local.set_defaults(func=cmd_local)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    try:
        return args.func(args)
    except SdkCatalogError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"✗ {e}", file=sys.stderr)
        return 1


def run() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    run()
