"""Batch conversion of a world-editor distribution into JSON trees."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path

from mpq2json.config import (
    MPQ2JSON_LEGACY_ENCODING,
    MPQ2JSON_MPQ_FOLDERS,
    MPQ2JSON_OUTPUT_DIR,
)
from mpq2json.declarations import parse_jass
from mpq2json.documents import parse_document
from mpq2json.exceptions import Mpq2jsonError
from mpq2json.merge import merge
from mpq2json.schemas.conversion import (
    ConversionFailure,
    ConversionJob,
    ConversionReport,
    DocumentKind,
)
from mpq2json.schemas.nodes import RecordNode
from mpq2json.store import (
    persist_merge_file_async,
    read_source_text_async,
    write_json_tree_async,
)
from mpq2json.utils.logging_config import get_logger

logger = get_logger(__name__)

_API_JASS_FILES = ("BlizzardAPI", "DzAPI", "KKAPI", "KKPRE")
_NATIVE_JASS_FILES = ("common", "blizzard")
_UI_FILES = ("action", "call", "condition", "event")
_TRIGGER_TABLE_FOLDER = "dzapi2"
MERGED_TABLE_NAME = "TriggerMerged.json"


@dataclass
class ConversionOptions:
    """Options for a batch conversion.

    Attributes:
        we_root: Root of the world-editor distribution.
        output_dir: Directory receiving the ``jass/`` and ``mpq/`` trees.
        mpq_folders: Folders under ``share/mpq`` holding trigger-UI files.
        legacy_encoding: Encoding of ``WorldEditStrings.txt``.
        merge_trigger_tables: If True, merge TriggerStrings and TriggerData
            into ``mpq/dzapi2/TriggerMerged.json``.
    """

    we_root: Path
    output_dir: Path = MPQ2JSON_OUTPUT_DIR
    mpq_folders: tuple[str, ...] = field(default_factory=lambda: MPQ2JSON_MPQ_FOLDERS)
    legacy_encoding: str = MPQ2JSON_LEGACY_ENCODING
    merge_trigger_tables: bool = True


def plan_jobs(options: ConversionOptions) -> list[ConversionJob]:
    """List the source documents present under ``options.we_root``.

    Missing files are left out; a missing ``jass/japi`` folder is not an
    error.
    """
    we = options.we_root
    out = options.output_dir
    jass_dir = we / "jass"
    mpq_dir = we / "share" / "mpq"
    jobs: list[ConversionJob] = []

    def add(kind: DocumentKind, source: Path, destination: Path, encoding: str = "utf-8") -> None:
        if source.is_file():
            jobs.append(
                ConversionJob(kind=kind, source=source, destination=destination, encoding=encoding)
            )

    for name in _API_JASS_FILES:
        add(DocumentKind.JASS, jass_dir / f"{name}.j", out / "jass" / f"{name}.json")

    japi_dir = jass_dir / "japi"
    if japi_dir.is_dir():
        for source in sorted(japi_dir.glob("*.j")):
            add(DocumentKind.JASS, source, out / "jass" / "japi" / f"{source.stem}.json")

    for name in _NATIVE_JASS_FILES:
        add(DocumentKind.JASS, jass_dir / "system" / "ht" / f"{name}.j", out / "jass" / f"{name}.json")

    for folder in options.mpq_folders:
        for name in _UI_FILES:
            add(
                DocumentKind.TRIGGER_UI,
                mpq_dir / folder / f"{name}.txt",
                out / "mpq" / folder / f"{name}.json",
            )
        add(
            DocumentKind.TRIGGER_DEFINE,
            mpq_dir / folder / "define.txt",
            out / "mpq" / folder / "define.json",
        )

    ui_dir = mpq_dir / "dzapi" / "ui"
    table_out = out / "mpq" / _TRIGGER_TABLE_FOLDER
    add(DocumentKind.TRIGGER_STRINGS, ui_dir / "TriggerStrings.txt", table_out / "TriggerStrings.json")
    add(DocumentKind.TRIGGER_DATA, ui_dir / "TriggerData.txt", table_out / "TriggerData.json")
    add(
        DocumentKind.EDIT_STRINGS,
        mpq_dir / "units" / "ui" / "WorldEditStrings.txt",
        out / "mpq" / "WorldEditStrings.json",
        encoding=options.legacy_encoding,
    )
    return jobs


async def convert_document(job: ConversionJob) -> RecordNode:
    """Read, parse and write one document.

    Returns:
        The parsed tree.

    Raises:
        SourceReadError: If the source cannot be read.
        OutputWriteError: If the JSON output cannot be written.
    """
    text = await read_source_text_async(job.source, job.encoding)
    if job.kind is DocumentKind.JASS:
        tree = parse_jass(text, source=job.source.name)
    else:
        tree = parse_document(job.kind, text)
    await write_json_tree_async(job.destination, tree)
    logger.info("Wrote %s (%d entries)", job.destination, len(tree))
    return tree


async def convert_all(options: ConversionOptions) -> ConversionReport:
    """Convert every document found under ``options.we_root``.

    Documents are processed concurrently and independently: a failure is
    logged and recorded in the report, and the remaining documents still run.
    """
    report = ConversionReport()
    jobs = plan_jobs(options)
    if not jobs:
        logger.warning("No source documents found under %s", options.we_root)
        return report

    trees = await asyncio.gather(*(_run_job(job, report) for job in jobs))
    by_kind: dict[DocumentKind, RecordNode] = {}
    for job, tree in zip(jobs, trees):
        if tree is not None and job.kind in (DocumentKind.TRIGGER_STRINGS, DocumentKind.TRIGGER_DATA):
            by_kind[job.kind] = tree

    if options.merge_trigger_tables and by_kind:
        target = options.output_dir / "mpq" / _TRIGGER_TABLE_FOLDER / MERGED_TABLE_NAME
        combined = merge(
            by_kind.get(DocumentKind.TRIGGER_STRINGS, {}),
            by_kind.get(DocumentKind.TRIGGER_DATA, {}),
        )
        await _run_merge(target, combined, report, MergeTargetLocks())

    logger.info("Converted %d documents, %d failed", len(report.written), len(report.failed))
    return report


class MergeTargetLocks:
    """One lock per merge target, serializing read-modify-write cycles."""

    def __init__(self) -> None:
        self._locks: dict[Path, asyncio.Lock] = {}

    def for_path(self, path: Path) -> asyncio.Lock:
        key = path.resolve()
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock


async def persist_merge_locked(
    path: Path, fresh: RecordNode, locks: MergeTargetLocks
) -> RecordNode:
    """Persist-merge ``fresh`` into ``path`` while holding that path's lock."""
    async with locks.for_path(path):
        return await persist_merge_file_async(path, fresh)


async def _run_job(job: ConversionJob, report: ConversionReport) -> RecordNode | None:
    try:
        tree = await convert_document(job)
    except Mpq2jsonError as exc:
        logger.error("Failed to convert %s: %s", job.source, exc)
        report.failed.append(ConversionFailure(path=job.source, error=str(exc)))
        return None
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error converting %s", job.source)
        report.failed.append(ConversionFailure(path=job.source, error=repr(exc)))
        return None
    report.written.append(job.destination)
    return tree


async def _run_merge(
    target: Path, fresh: RecordNode, report: ConversionReport, locks: MergeTargetLocks
) -> None:
    try:
        await persist_merge_locked(target, fresh, locks)
    except Mpq2jsonError as exc:
        logger.error("Skipping merge into %s: %s", target, exc)
        report.failed.append(ConversionFailure(path=target, error=str(exc)))
        return
    report.written.append(target)
    logger.info("Merged trigger tables into %s", target)
