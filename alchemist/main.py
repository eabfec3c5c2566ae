import argparse
import asyncio
import sys
from pathlib import Path

from alchemist.config.settings import Settings
from alchemist.documents.exceptions import DocumentError
from alchemist.documents.file_loader import FileLoader
from alchemist.extraction.exceptions import ExtractionError, MissingCredentialError
from alchemist.logging.logger import Log
from alchemist.results.models import SUPPORTED_LANGUAGES, ExtractionMode, mode_of
from alchemist.session.exceptions import SessionError
from alchemist.session.session import build_session
from alchemist.tabular.exceptions import TabularCodecError

OPERATIONS = ("tabular", "text", "view")
FORMATS = ("xlsx", "doc")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="alchemist",
        description="Extract a document into a spreadsheet or word-processor file.",
    )
    parser.add_argument("path", type=Path, help="Image, PDF, Word or spreadsheet file")
    parser.add_argument(
        "--operation",
        choices=OPERATIONS,
        default="tabular",
        help="tabular/text: AI extraction; view: read a spreadsheet natively",
    )
    parser.add_argument(
        "--translate-to",
        default=None,
        help=f"Target language: {', '.join(SUPPORTED_LANGUAGES)} (or none)",
    )
    parser.add_argument("--format", choices=FORMATS, default=None, help="Export format")
    parser.add_argument("--output-dir", type=Path, default=None)
    parser.add_argument("--api-key", default=None, help="Overrides the configured API key")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace, settings: Settings) -> Path | None:
    """Upload -> extract -> export. Returns the written file, or None if empty."""
    session = build_session(settings, api_key=args.api_key)
    session.upload(FileLoader().load(args.path))
    session.set_translation_target(args.translate_to)

    if args.operation == "text":
        await session.extract_text()
    elif args.operation == "view":
        await session.view_spreadsheet()
    else:
        await session.extract_tabular()

    export_format = args.format or (
        "doc" if mode_of(session.result) is ExtractionMode.TEXT else "xlsx"
    )
    if export_format == "doc":
        artifact = session.download_word()
    else:
        artifact = session.download_spreadsheet()
    if artifact is None:
        Log.warning("Nothing to export")
        return None

    output_dir = args.output_dir or Path(settings.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / artifact.filename
    output_path.write_bytes(artifact.data)
    Log.info(f"Wrote {output_path}")
    return output_path


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> configure logging -> run one operation."""
    settings = Settings()
    Log.configure(settings.log_level)
    args = parse_args(argv)
    try:
        output_path = asyncio.run(run(args, settings))
    except (
        DocumentError,
        ExtractionError,
        MissingCredentialError,
        SessionError,
        TabularCodecError,
        OSError,
        ValueError,
    ) as exc:
        Log.error(f"An error occurred: {exc}")
        return 1
    if output_path is not None:
        print(output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
