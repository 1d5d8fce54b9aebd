from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from algowiki.app import (
    build_scheduler,
    catalog_status,
    domain_detail,
    list_algorithms,
    list_domains,
    list_families,
    list_reductions,
    list_variations,
    rebuild_once,
    search_catalog,
    variation_detail,
)
from algowiki.config import configure_logging
from algowiki.domain.rebuild import RebuildState

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from algowiki.domain.ports.queries import ProblemRef

log = logging.getLogger(__name__)

LISTING_COMMANDS = ("domains", "families", "variations", "algorithms", "reductions")


def _positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise ValueError(f"Interval must be positive, got {value}")
    return number


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise ValueError(f"Expected a non-negative integer, got {value}")
    return number


def _optional_limit(value: str | None) -> int | None:
    return None if value is None else _non_negative_int(value)


def _add_slug_filters(parser: argparse.ArgumentParser, *names: str) -> None:
    for name in names:
        parser.add_argument(f"--{name}", type=str, help=f"Only entries under this {name} slug")
    parser.add_argument("--limit", type=str, help="Maximum entries (default: all)")


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rebuild and query the algorithm catalog")
    parser.add_argument("--verbose", action="store_true", help="Log at DEBUG level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("rebuild", help="Fetch the sheets and rebuild the catalog once")

    watch = subparsers.add_parser("watch", help="Rebuild on a fixed interval until Ctrl+C")
    watch.add_argument(
        "--interval",
        type=str,
        help="Seconds between rebuilds (defaults to ALGOWIKI_REBUILD_INTERVAL or 60)",
    )

    search = subparsers.add_parser("search", help="Prefix search over the catalog")
    search.add_argument("term", type=str, help="Start of a domain, problem or algorithm name")
    search.add_argument("--limit", type=str, default="10", help="Maximum hits (default: 10)")
    search.add_argument("--offset", type=str, default="0", help="Hits to skip (default: 0)")

    subparsers.add_parser("status", help="Show the last rebuild time and catalog size")

    _add_slug_filters(subparsers.add_parser("domains", help="List domains by algorithm count"))
    domain = subparsers.add_parser("domain", help="Show one domain")
    domain.add_argument("slug", type=str)

    _add_slug_filters(
        subparsers.add_parser("families", help="List families by algorithm count"), "domain"
    )
    _add_slug_filters(
        subparsers.add_parser("variations", help="List variations by algorithm count"),
        "domain",
        "family",
    )
    variation = subparsers.add_parser("variation", help="Show a variation and its neighbours")
    variation.add_argument("slug", type=str)
    variation.add_argument("--domain", type=str, required=True, help="Domain slug")
    variation.add_argument("--family", type=str, required=True, help="Family slug")

    _add_slug_filters(
        subparsers.add_parser("algorithms", help="List algorithms"), "domain", "family", "variation"
    )
    _add_slug_filters(
        subparsers.add_parser("reductions", help="List reductions by source problem"),
        "domain",
        "family",
        "variation",
    )

    return parser.parse_args(list(argv))


def _print_hits(term: str, limit: int, offset: int) -> None:
    grouped = search_catalog(term, limit=limit, offset=offset)
    if not grouped:
        print(f"No matches for {term!r}")  # noqa: T201
        return
    for group, hits in grouped.items():
        print(f"{group}:")  # noqa: T201
        for hit in hits:
            path = " > ".join(
                part for part in (hit.domain, hit.family, hit.variation, hit.algorithm) if part
            )
            print(f"  {path}")  # noqa: T201


def _print_status() -> None:
    last_rebuilt, stats = catalog_status()
    print(f"last rebuilt: {last_rebuilt or 'never'}")  # noqa: T201
    print(  # noqa: T201
        f"domains={stats.domains} families={stats.families} "
        f"variations={stats.variations} algorithms={stats.algorithms}"
    )


def _ref_path(ref: ProblemRef) -> str:
    return f"{ref.domain_slug}/{ref.family_slug}/{ref.variation_slug}"


def _print_listing(args: argparse.Namespace, limit: int | None) -> None:
    filters = {
        name: getattr(args, name)
        for name in ("domain", "family", "variation")
        if getattr(args, name, None) is not None
    }
    if args.command == "domains":
        for domain in list_domains(limit=limit):
            print(f"{domain.domain_slug}: {domain.domain} ({domain.algorithms} algorithms)")  # noqa: T201
    elif args.command == "families":
        for family in list_families(limit=limit, **filters):
            print(  # noqa: T201
                f"{family.domain_slug}/{family.family_slug}: {family.family} "
                f"({family.algorithms} algorithms)"
            )
    elif args.command == "variations":
        for variation in list_variations(limit=limit, **filters):
            print(  # noqa: T201
                f"{variation.domain_slug}/{variation.family_slug}/{variation.variation_slug}: "
                f"{variation.variation} ({variation.algorithms} algorithms)"
            )
    elif args.command == "algorithms":
        for algorithm in list_algorithms(limit=limit, **filters):
            print(f"{algorithm.problem.variation}: {algorithm.name}")  # noqa: T201
    else:
        for reduction in list_reductions(limit=limit, **filters):
            print(  # noqa: T201
                f"{reduction.reduction_id or '-'}: {reduction.source.variation} "
                f"-> {reduction.target.variation}"
            )


def _print_domain(slug: str) -> bool:
    domain = domain_detail(slug)
    if domain is None:
        print(f"No domain {slug!r}")  # noqa: T201
        return False
    print(f"{domain.domain} ({domain.domain_slug})")  # noqa: T201
    if domain.description:
        print(domain.description)  # noqa: T201
    print(  # noqa: T201
        f"families={domain.families} variations={domain.variations} "
        f"algorithms={domain.algorithms}"
    )
    return True


def _print_variation(slug: str, *, domain: str, family: str) -> bool:
    detail = variation_detail(slug, domain=domain, family=family)
    if detail is None:
        print(f"No variation {domain}/{family}/{slug}")  # noqa: T201
        return False
    problem = detail.problem
    print(f"{problem.family} > {problem.variation}")  # noqa: T201
    if detail.parent is not None:
        print(f"parent: {_ref_path(detail.parent)}")  # noqa: T201
    for label, refs in (("children", detail.children), ("related", detail.related)):
        if refs:
            print(f"{label}: {', '.join(_ref_path(ref) for ref in refs)}")  # noqa: T201
    return True


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        interval = (
            _positive_float(parsed_args.interval)
            if parsed_args.command == "watch" and parsed_args.interval is not None
            else None
        )
        if parsed_args.command == "search":
            limit = _non_negative_int(parsed_args.limit)
            offset = _non_negative_int(parsed_args.offset)
        elif parsed_args.command in LISTING_COMMANDS:
            limit = _optional_limit(parsed_args.limit)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "rebuild":
            result = rebuild_once()
            if result.state is not RebuildState.COMMITTED:
                log.error("Rebuild failed: %s", result.error)
                sys.exit(1)
        elif parsed_args.command == "watch":
            build_scheduler(interval_seconds=interval).run_forever()
        elif parsed_args.command == "search":
            _print_hits(parsed_args.term, limit, offset)
        elif parsed_args.command == "status":
            _print_status()
        elif parsed_args.command in LISTING_COMMANDS:
            _print_listing(parsed_args, limit)
        elif parsed_args.command == "domain":
            if not _print_domain(parsed_args.slug):
                sys.exit(1)
        elif parsed_args.command == "variation":
            found = _print_variation(
                parsed_args.slug, domain=parsed_args.domain, family=parsed_args.family
            )
            if not found:
                sys.exit(1)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error")
        sys.exit(1)

def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
