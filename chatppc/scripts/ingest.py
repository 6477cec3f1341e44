"""
Batch ingestion CLI.

Indexes every markdown file of a directory (non-recursive) into the
chunk store. Unchanged files are skipped, changed files are re-indexed,
and per-file failures are reported and counted without stopping the run.

Usage:
    python -m chatppc.scripts.ingest <directory>
    chatppc-ingest <directory>

Exit codes: 1 when the directory argument or required configuration is
missing, or the directory cannot be read; 0 otherwise.

Dependencies: python-dotenv, chatppc.core.ingestion, chatppc.boundary, chatppc.configs
System role: Operator-facing bulk (re-)indexing tool
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Callable, Iterable, Iterator, Sequence

from dotenv import load_dotenv

from chatppc.boundary.db.connection import get_async_engine, get_async_session_factory
from chatppc.boundary.vdb import ChunkStore, get_embeddings
from chatppc.configs import Settings, get_settings
from chatppc.core.ingestion import (
    BatchIngestionSummary,
    DocumentSplitter,
    IngestionOrchestrator,
    IngestionResult,
    IngestionState,
    IngestionStatus,
    find_markdown_files,
)
from chatppc.observability.log_utils import log_with_context
from chatppc.observability.logger import configure_logging, get_logger

logger = get_logger(__name__)

STATUS_LABELS = {
    IngestionStatus.SUCCESS: "OK",
    IngestionStatus.SKIPPED: "SKIP",
    IngestionStatus.ERROR: "ERROR",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chatppc-ingest",
        description="Index markdown files from a directory into the ChatPPC chunk store.",
    )
    parser.add_argument("directory", nargs="?", help="Directory containing .md files")
    return parser


def format_result(result: IngestionResult) -> str:
    """One outcome line per file."""
    label = STATUS_LABELS[result.status]
    if result.status == IngestionStatus.SUCCESS:
        verb = "updated" if result.previous_hash else "added"
        return f"[{label}] {result.source}: {verb}, {result.chunks} chunks"
    return f"[{label}] {result.source}: {result.message}"


def format_summary(summary: BatchIngestionSummary) -> str:
    return (
        f"Processed {summary.total} file(s): "
        f"{summary.success_count} stored ({summary.chunks_stored} chunks), "
        f"{summary.skipped_count} skipped, {summary.error_count} failed"
    )


def iter_documents(
    paths: Sequence[str],
    on_error: Callable[[IngestionResult], None],
) -> Iterator[tuple[str, str]]:
    """
    Read files as UTF-8, one at a time, in the given order.

    Unreadable files are reported through on_error and skipped, at the
    point where they would have been ingested.

    Yields:
        (source, content) pairs for readable files
    """
    for path in paths:
        try:
            content = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            log_with_context(logger, logging.WARNING, "Could not read file", source=path, error=e)
            on_error(
                IngestionResult(
                    source=path,
                    status=IngestionStatus.ERROR,
                    state=IngestionState.FAILED,
                    message=f"Could not read file: {e}",
                )
            )
            continue
        yield path, content


async def run_ingestion(
    documents: Iterable[tuple[str, str]],
    settings: Settings,
    chunk_store: ChunkStore | None = None,
    on_result: Callable[[IngestionResult], None] | None = None,
) -> BatchIngestionSummary:
    """
    Ingest documents sequentially with one database session.

    Args:
        documents: (source, content) pairs, consumed lazily
        settings: Application settings (chunking, embeddings)
        chunk_store: Chunk store to use (built from settings if None)
        on_result: Called with each result as soon as it is known

    Returns:
        BatchIngestionSummary: Per-file results
    """
    if chunk_store is None:
        chunk_store = ChunkStore(
            embeddings=get_embeddings(),
            max_retries=settings.embeddings.max_retries,
        )
    splitter = DocumentSplitter(
        chunk_size=settings.ingestion.chunk_size,
        chunk_overlap=settings.ingestion.chunk_overlap,
    )

    SessionFactory = get_async_session_factory()
    try:
        async with SessionFactory() as db:
            orchestrator = IngestionOrchestrator(db, chunk_store, splitter)
            return await orchestrator.ingest_batch(documents, on_result=on_result)
    finally:
        await get_async_engine().dispose()


def main(argv: Sequence[str] | None = None) -> int:
    """
    CLI entry point.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        int: Process exit code
    """
    args = build_parser().parse_args(argv)
    if not args.directory:
        print("Usage: chatppc-ingest <directory>", file=sys.stderr)
        return 1

    load_dotenv()
    settings = get_settings()
    configure_logging(settings.log_level)

    missing = settings.missing_ingestion_config()
    if missing:
        print(
            f"Missing required configuration: {', '.join(missing)}",
            file=sys.stderr,
        )
        return 1

    try:
        paths = find_markdown_files(args.directory, settings.ingestion.file_extension)
    except OSError as e:
        print(f"Cannot read directory {args.directory}: {e}", file=sys.stderr)
        return 1

    if not paths:
        print(f"No {settings.ingestion.file_extension} files found in {args.directory}")
        return 0

    print(f"Found {len(paths)} file(s) in {args.directory}")
    read_failures: list[IngestionResult] = []

    def report(result: IngestionResult) -> None:
        print(format_result(result), flush=True)

    def report_read_failure(result: IngestionResult) -> None:
        read_failures.append(result)
        report(result)

    documents = iter_documents(paths, on_error=report_read_failure)
    summary = asyncio.run(run_ingestion(documents, settings, on_result=report))
    summary.results.extend(read_failures)
    summary.results.sort(key=lambda result: result.source)

    print(format_summary(summary))
    return 0


if __name__ == "__main__":
    sys.exit(main())
