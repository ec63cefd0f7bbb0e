"""Report which applications depend on a library version, a library, or a vendor."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from contextlib import suppress

from deptrack.db import database
from deptrack.db.repositories import applications as repo_applications
from deptrack.utils.settings import log_level_name


logger = logging.getLogger("deptrack.scripts.dependents_report")


# Access SessionLocal dynamically so test fixtures that rebind the
# sessionmaker are respected.
SessionLocal = lambda: database.SessionLocal()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List applications depending on a library")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--library-version-id", type=int, help="Search a single library version")
    target.add_argument("--library-id", type=int, help="Search every version of a library")
    target.add_argument("--vendor-id", type=int, help="Search every library published by a vendor")
    parser.add_argument(
        "--versions",
        action="store_true",
        help="List matching application versions instead of applications",
    )
    parser.add_argument("--json", action="store_true", help="Print JSON output")
    return parser.parse_args(argv)


def _search(session, args: argparse.Namespace):
    if args.library_version_id is not None:
        if args.versions:
            return repo_applications.search_application_versions(session, args.library_version_id)
        return repo_applications.search_applications(session, args.library_version_id)
    if args.library_id is not None:
        if args.versions:
            return repo_applications.search_all_application_versions(session, args.library_id)
        return repo_applications.search_all_applications(session, args.library_id)
    if args.versions:
        return repo_applications.coarse_search_application_versions(session, args.vendor_id)
    return repo_applications.coarse_search_applications(session, args.vendor_id)


def _rows(results, versions: bool) -> list[dict]:
    if versions:
        return [
            {
                "application_id": v.application_id,
                "application": v.application.name,
                "application_version_id": v.id,
                "version": v.version,
            }
            for v in results
        ]
    return [
        {"application_id": a.id, "application": a.name}
        for a in sorted(results, key=lambda a: (a.name, a.id))
    ]


def report(args: argparse.Namespace) -> int:
    session = SessionLocal()
    try:
        started = time.perf_counter()
        rows = _rows(_search(session, args), args.versions)
        if args.json:
            print(json.dumps(rows, indent=2))
        elif not rows:
            print("No dependent applications found.")
        else:
            for row in rows:
                if args.versions:
                    print(f"{row['application']} {row['version']} (version id {row['application_version_id']})")
                else:
                    print(f"{row['application']} (id {row['application_id']})")
        logger.info(
            "Dependents report finished",
            extra={
                "matches": len(rows),
                "versions": args.versions,
                "duration_seconds": round(time.perf_counter() - started, 3),
            },
        )
        return 0
    finally:
        with suppress(Exception):
            session.close()


def main(argv: list[str] | None = None) -> int:
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=getattr(logging, log_level_name(), logging.INFO),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    args = parse_args(argv)
    return report(args)


if __name__ == "__main__":  # pragma: no cover - manual execution path
    sys.exit(main())
