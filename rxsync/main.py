import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from rxsync.batch.models import SourceFile
from rxsync.config.settings import Settings
from rxsync.export.models import ExportFormat
from rxsync.logging.logger import Log
from rxsync.session import build_session

IMAGE_SUFFIXES = frozenset({".jpg", ".jpeg", ".png", ".webp", ".tif", ".tiff", ".bmp"})


def find_images(inputs: Sequence[Path]) -> list[Path]:
    """Expand files and directories into image paths, keeping argument order."""
    found: list[Path] = []
    for item in inputs:
        if item.is_dir():
            found.extend(
                sorted(
                    p for p in item.rglob("*")
                    if p.is_file() and p.suffix.lower() in IMAGE_SUFFIXES
                )
            )
        elif item.is_file():
            found.append(item)
        else:
            Log.warning(f"Skipping missing input {item}")
    return found


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="rxsync",
        description="Extract structured MedicalDocument XML from scanned prescriptions.",
    )
    parser.add_argument("inputs", nargs="+", type=Path, help="Image files or directories")
    parser.add_argument(
        "--out", type=Path, default=Path("."), help="Directory for the exported files"
    )
    parser.add_argument(
        "--format",
        dest="formats",
        action="append",
        choices=[f.value for f in ExportFormat],
        help="Export format, may be repeated (default: xml and csv)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: settings -> session -> add files -> run batch -> export."""
    args = parse_args(argv)
    # Show the results step before main returns.
    settings = Settings().model_copy(update={"results_delay_seconds": 0})
    Log.configure(settings.log_level)

    images = find_images(args.inputs)
    if not images:
        Log.error("No image files found")
        return 1

    session = build_session(settings)
    try:
        session.store.add_files(SourceFile.from_path(path) for path in images)
        result = session.orchestrator.run_batch()

        failed_exports: list[str] = []
        for fmt in args.formats or [f.value for f in ExportFormat]:
            artifact = session.exporter.export(fmt)
            if artifact is None:
                failed_exports.append(fmt)
                continue
            session.exporter.save(artifact, args.out)
    finally:
        session.close()

    if failed_exports:
        Log.error(f"Export failed for: {', '.join(failed_exports)}")
    if result is None or result.failed or failed_exports:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
