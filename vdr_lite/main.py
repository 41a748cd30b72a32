import argparse
import asyncio
import sys
from pathlib import Path

from vdr_lite.archive.unpacker import validate_archive_upload
from vdr_lite.config.settings import Settings
from vdr_lite.exceptions import VdrError
from vdr_lite.logging.logger import Log
from vdr_lite.processor.processor import build_processor
from vdr_lite.service.analysis_service import AnalysisService
from vdr_lite.storage.repository import LocalAnalysisRepository


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vdr_lite",
        description="Analyse a ZIP archive of diligence documents",
    )
    parser.add_argument("archive", help="Path to the .zip archive")
    parser.add_argument(
        "--export",
        action="store_true",
        help="Also render the markdown report into the output directory",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> validate upload -> analyse -> optionally export."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    archive_path = Path(args.archive)
    try:
        archive_bytes = archive_path.read_bytes()
    except OSError as exc:
        Log.error(f"Cannot read archive {archive_path}: {exc}")
        return 1

    try:
        validate_archive_upload(archive_path.name, len(archive_bytes), settings.max_file_size_bytes)
        service = AnalysisService(
            processor=build_processor(settings),
            repository=LocalAnalysisRepository(settings.output_dir),
        )
        analysis_id, result = asyncio.run(service.analyse(archive_bytes))
        print(analysis_id)
        if result.errors:
            Log.warning(f"Analysis {analysis_id} needs review", errors=len(result.errors))
        if args.export:
            service.export(analysis_id)
            print(Path(settings.output_dir) / f"{analysis_id}.md")
    except (VdrError, ValueError) as exc:
        Log.error(f"Analysis failed: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
