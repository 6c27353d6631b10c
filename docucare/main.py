import argparse
import sys
import uuid
from collections.abc import Sequence
from pathlib import Path

import psycopg

from docucare.config.settings import Settings
from docucare.database.connection import apply_schema, close_pool, init_pool
from docucare.database.repositories.record_repository import RecordRepository
from docucare.logging.logger import Log
from docucare.pdf.factory import PdfRasterizerFactory
from docucare.processor.exceptions import ProcessorError
from docucare.processor.file_loader import ScanLoader
from docucare.processor.processor import build_processor
from docucare.summarization.exceptions import SummarizationError
from docucare.summarization.factory import SummarizerFactory


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docucare",
        description="Redact, file and summarize scanned medical documents.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    scan = sub.add_parser("scan", help="process image/PDF files as one document")
    scan.add_argument("--owner", required=True, help="owner email for the new record")
    scan.add_argument("files", nargs="+", type=Path)

    ask = sub.add_parser("ask", help="ask a general medical question")
    ask.add_argument("question")

    list_cmd = sub.add_parser("list", help="list stored records")
    list_cmd.add_argument("--owner", required=True)
    list_cmd.add_argument("--search", default=None, help="filter by title or date")

    rename = sub.add_parser("rename", help="change a record title")
    rename.add_argument("record_id", type=uuid.UUID)
    rename.add_argument("title")

    delete = sub.add_parser("delete", help="delete a record")
    delete.add_argument("record_id", type=uuid.UUID)

    sub.add_parser("init-db", help="create the records table if missing")

    return parser


def _scan(args: argparse.Namespace, settings: Settings) -> int:
    loader = ScanLoader(PdfRasterizerFactory.create(settings))
    images = loader.load(args.files)
    processor = build_processor(settings, record_repo=RecordRepository())
    try:
        record = processor.process(images, owner_email=args.owner)
    finally:
        processor.close()
    print(f"{record.id}\t{record.title}\t{record.page_count} pages")
    return 0


def _ask(args: argparse.Namespace, settings: Settings) -> int:
    summarizer = SummarizerFactory.create(settings)
    try:
        print(summarizer.answer(args.question))
    finally:
        summarizer.close()
    return 0


def _list(args: argparse.Namespace, _settings: Settings) -> int:
    for record in RecordRepository().list_for_owner(args.owner, search=args.search):
        print(f"{record.id}\t{record.created_at:%Y-%m-%d}\t{record.title}\t{record.page_count}")
    return 0


def _rename(args: argparse.Namespace, _settings: Settings) -> int:
    RecordRepository().update_title(args.record_id, args.title)
    return 0


def _delete(args: argparse.Namespace, _settings: Settings) -> int:
    RecordRepository().delete(args.record_id)
    return 0


def _init_db(_args: argparse.Namespace, _settings: Settings) -> int:
    apply_schema()
    return 0


_COMMANDS = {
    "scan": _scan,
    "ask": _ask,
    "list": _list,
    "rename": _rename,
    "delete": _delete,
    "init-db": _init_db,
}

_NEEDS_DB = {"scan", "list", "rename", "delete", "init-db"}


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: parse args -> configure -> run one command."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    if args.command in _NEEDS_DB:
        init_pool(settings)
    try:
        return _COMMANDS[args.command](args, settings)
    except (ProcessorError, SummarizationError, psycopg.Error, ValueError) as exc:
        Log.error(str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        close_pool()


if __name__ == "__main__":
    sys.exit(main())
