"""Assemble the impact report and collect exported symbols."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from depimpact.extractors.base import SymbolExtractor, unique_names
from depimpact.impact.models import ImpactEntry, ImpactReport

logger = logging.getLogger("depimpact.impact")

DEFAULT_EXPORT_LIMIT = 50


def export_targets(
    changed: list[str], impacted: list[ImpactEntry], limit: int = DEFAULT_EXPORT_LIMIT
) -> list[str]:
    """Changed files followed by the `limit` closest impacted files, uniqued."""
    targets: dict[str, None] = {}
    for fp in changed:
        targets.setdefault(fp, None)
    for entry in impacted[: max(limit, 0)]:
        targets.setdefault(entry.file, None)
    return list(targets)


def _safe_extract(extractor: SymbolExtractor, file_path: str) -> list[str]:
    try:
        return unique_names(list(extractor.extract_exports(file_path) or []))
    except Exception as e:
        logger.warning(f"Symbol extraction failed for {file_path}: {e}")
        return []


def collect_exports(
    files: list[str],
    extractor: SymbolExtractor,
    max_workers: int = 8,
) -> dict[str, list[str]]:
    """Extract exports for each file concurrently.

    A failure for one file yields an empty list for that file only. The
    result preserves the order of `files`.
    """
    if not files:
        return {}
    workers = max(1, min(max_workers, len(files)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = pool.map(lambda fp: _safe_extract(extractor, fp), files)
        return dict(zip(files, results))


def assemble_report(
    changed: list[str],
    impacted: list[ImpactEntry],
    extractor: SymbolExtractor | None,
    limit: int = DEFAULT_EXPORT_LIMIT,
    max_workers: int = 8,
) -> ImpactReport:
    """Merge changed files, ranked impact and exported symbols into a report."""
    exports: dict[str, list[str]] = {}
    if extractor is not None:
        exports = collect_exports(
            export_targets(changed, impacted, limit), extractor, max_workers
        )
    return ImpactReport(changed=list(changed), impacted=list(impacted), exports=exports)
