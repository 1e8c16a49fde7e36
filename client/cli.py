"""Command-line front end for the Image Analysis Hub.

Usage:
    python -m client.cli analyze [PATH ...] [--folder DIR ...] [--server URL] [--output-dir DIR]
    python -m client.cli serve [--host HOST] [--port PORT]

`analyze` treats PATH arguments like a drag-and-drop (directories are
ignored) and `--folder` like the folder picker (recursive, grouped by
sub-folder). Results are printed one table per folder and exported as
`image-analysis-<date>.csv`.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from client.analyze_client import AnalyzeClient
from client.csv_export import write_csv
from client.file_intake import FileCandidate, collect_dropped, collect_folder
from client.review_session import ReviewSession
from models.image_record import ImageRecord
from services.openai.category_taxonomy import category_name
from utils.config import configure_logging, load_settings

LOGGER = logging.getLogger(__name__)


def build_parser(default_server: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="image-analysis-hub", description="Analyze images for stock metadata.")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL or INFO)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Send images to the analysis API")
    analyze.add_argument("paths", nargs="*", help="Image files (directories are ignored)")
    analyze.add_argument("--folder", action="append", default=[], help="Folder to scan recursively")
    analyze.add_argument("--server", default=default_server, help=f"Analysis API (default: {default_server})")
    analyze.add_argument("--output-dir", default=".", help="Where to write the CSV export")
    analyze.add_argument("--no-csv", action="store_true", help="Do not write a CSV export")

    serve = subparsers.add_parser("serve", help="Run the analysis API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    return parser


def gather_candidates(paths: List[str], folders: List[str]) -> List[FileCandidate]:
    candidates = collect_dropped(paths)
    for folder in folders:
        candidates.extend(collect_folder(folder))
    return candidates


def format_groups(groups: Dict[str, List[ImageRecord]]) -> str:
    """Render one plain-text table per folder group."""
    lines: List[str] = []
    for folder, records in groups.items():
        lines.append(f"== {folder} ({len(records)})")
        for index, record in enumerate(records):
            analysis = record.analysis
            if analysis is None:
                lines.append(f"  [{index}] {record.file_name}: pending")
                continue
            name = category_name(analysis.category_id) or "-"
            lines.append(f"  [{index}] {record.file_name}")
            lines.append(f"      title:    {analysis.title}")
            lines.append(f"      about:    {analysis.description}")
            lines.append(f"      category: {analysis.category_id} ({name})")
            lines.append(f"      keywords: {', '.join(analysis.keyword_list())}")
        lines.append("")
    return "\n".join(lines)


async def run_analyze(args: argparse.Namespace) -> int:
    candidates = gather_candidates(args.paths, args.folder)
    if not candidates:
        LOGGER.warning("No image files selected")
        return 0

    LOGGER.info("Analyzing %d images via %s", len(candidates), args.server)
    async with AnalyzeClient(args.server) as api:
        session = ReviewSession(api)
        await session.analyze_files(candidates)

    groups = session.collection.grouped()
    print(format_groups(groups))

    if not args.no_csv and len(session.collection):
        records = [record for group in groups.values() for record in group]
        target = write_csv(records, Path(args.output_dir))
        print(f"CSV written to {target}")

    return 0 if len(session.collection) == len(candidates) else 1


def run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("main:app", host=args.host, port=args.port)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    args = build_parser(settings.server_url).parse_args(argv)
    configure_logging(args.log_level or settings.log_level)

    if args.command == "serve":
        return run_serve(args)
    try:
        return asyncio.run(run_analyze(args))
    except NotADirectoryError as exc:
        LOGGER.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
