"""Command line runner for the site content layer.

Lists, inspects and exports the unified collections so the static build (or a
human) can see exactly what the site will render.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import SiteConfig
from .logging_config import get_logger, setup_logging
from .models import Collection
from .repository import ContentRepository

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_FOUND = 2


@dataclass
class ExportSummary:
    """Summary of an export run."""

    started_at: str
    completed_at: str = ""
    output_dir: Optional[str] = None
    sources: List[str] = field(default_factory=list)
    counts: Dict[str, int] = field(default_factory=dict)
    files: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def exit_code(self) -> int:
        return EXIT_ERROR if self.errors else EXIT_OK

    def to_dict(self) -> Dict[str, Any]:
        return {
            "started_at": self.started_at,
            "completed_at": self.completed_at,
            "output_dir": self.output_dir,
            "sources": self.sources,
            "counts": self.counts,
            "files": self.files,
            "errors": self.errors,
            "exit_code": self.exit_code(),
        }


def _utc_now() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def export_collections(
    repository: ContentRepository,
    output_dir: Path,
    collections: Optional[List[str]] = None,
    logger: Optional[logging.Logger] = None,
) -> ExportSummary:
    """Write one ``<collection>.json`` index per collection."""
    logger = logger or get_logger("cli")
    summary = ExportSummary(
        started_at=_utc_now(),
        output_dir=str(output_dir),
        sources=repository.unifier.source_names,
    )
    output_dir.mkdir(parents=True, exist_ok=True)

    for collection in collections or list(Collection.ALL):
        try:
            documents = repository.list_all_documents(collection)
            path = output_dir / f"{collection}.json"
            payload = [document.to_dict() for document in documents]
            path.write_text(json.dumps(payload, indent=2, ensure_ascii=False, default=str), encoding="utf-8")
            summary.counts[collection] = len(documents)
            summary.files.append(str(path))
            logger.info(f"Wrote {len(documents)} {collection} to {path}")
        except OSError as exc:
            error_msg = f"Failed to export {collection}: {exc}"
            logger.error(error_msg)
            summary.errors.append(error_msg)

    summary.completed_at = _utc_now()
    return summary


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Site content runner - list, inspect and export unified reviews, guides and pages"
    )
    parser.add_argument("--config", type=Path, help="Path to site configuration YAML file")
    parser.add_argument("--log-file", type=Path, help="Write logs to file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument("--json", action="store_true", help="Output results as JSON")

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List documents in a collection")
    list_parser.add_argument("collection", choices=Collection.ALL)
    list_parser.add_argument("--category", help="Only documents in this category")

    show_parser = subparsers.add_parser("show", help="Show one document")
    show_parser.add_argument("collection", choices=Collection.ALL)
    show_parser.add_argument("slug")

    categories_parser = subparsers.add_parser("categories", help="List distinct categories")
    categories_parser.add_argument("collection", choices=Collection.ALL)

    export_parser = subparsers.add_parser("export", help="Write JSON indexes for the static build")
    export_parser.add_argument("--output", "-o", type=Path, required=True, help="Output directory")
    export_parser.add_argument(
        "--collections",
        nargs="+",
        choices=Collection.ALL,
        help="Collections to export (default: all)",
    )
    return parser


def main(argv: Optional[List[str]] = None, repository: Optional[ContentRepository] = None) -> int:
    """CLI entry point."""
    args = _build_parser().parse_args(argv)

    logger = setup_logging(
        log_file=args.log_file,
        level=logging.DEBUG if args.verbose else logging.INFO,
    )

    try:
        if repository is None:
            repository = ContentRepository.from_config(SiteConfig.from_env(args.config))

        if args.command == "list":
            if args.category:
                documents = repository.list_by_category(args.collection, args.category)
            else:
                documents = repository.list_all_documents(args.collection)
            if args.json:
                print(json.dumps([doc.to_dict() for doc in documents], indent=2, ensure_ascii=False, default=str))
            else:
                for doc in documents:
                    print(f"{doc.date or '-':<25} {doc.source:<8} {doc.slug}  {doc.title or ''}")
            return EXIT_OK

        if args.command == "show":
            document = repository.get_document(args.collection, args.slug)
            if document is None:
                logger.warning(f"No {args.collection} document with slug {args.slug!r}")
                return EXIT_NOT_FOUND
            if args.json:
                print(json.dumps(document.to_dict(), indent=2, ensure_ascii=False, default=str))
            else:
                for key, value in document.frontmatter.items():
                    print(f"{key}: {value}")
                print(f"source: {document.source}")
                print()
                print(document.content)
            return EXIT_OK

        if args.command == "categories":
            categories = repository.list_categories(args.collection)
            if args.json:
                print(json.dumps(categories, indent=2, ensure_ascii=False))
            else:
                for category in categories:
                    print(category)
            return EXIT_OK

        summary = export_collections(repository, args.output, args.collections, logger=logger)
        if args.json:
            print(json.dumps(summary.to_dict(), indent=2))
        else:
            logger.info(f"Export summary: {summary.counts}")
        return summary.exit_code()

    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
