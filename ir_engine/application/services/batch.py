"""Batch evaluation and year comparison.

Computations share nothing but the frozen settings, so a batch can be spread
over worker processes. The worker is a module-level function to stay
pickle-safe for ProcessPoolExecutor.
"""

from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
from typing import Optional, Sequence

import pandas as pd

from ir_engine.application.services.income_tax import IncomeTaxEngine
from ir_engine.core.exceptions import InvalidParameterError
from ir_engine.core.logging import get_logger
from ir_engine.core.settings import get_settings
from ir_engine.domain.models import IrRequest, IrResult, TaxYearSettings

log = get_logger(__name__)

# Headline columns exported by results_to_dataframe (IrResult field -> column)
DATAFRAME_COLUMNS: dict[str, str] = {
    "taxable_income": "Revenu imposable",
    "parts_nb": "Parts",
    "ir_net": "IR net",
    "decote": "Décote",
    "qf_is_capped": "QF plafonné",
    "pfu_ir": "PFU (IR)",
    "cehr": "CEHR",
    "cdhr": "CDHR",
    "ps_total": "Prélèvements sociaux",
    "total_tax": "Total impôts",
    "tmi_rate": "TMI (%)",
    "tmi_margin_global": "Marge avant changement",
}


def compute_ir_worker(args: tuple[IrRequest, TaxYearSettings]) -> IrResult:
    """Worker function computing one request.

    Args:
        args: Tuple of (request, settings)

    Returns:
        IrResult of the request
    """
    request, settings = args
    return IncomeTaxEngine(settings).compute(request)


def evaluate_batch(
    requests: Sequence[IrRequest],
    settings: TaxYearSettings,
    max_workers: Optional[int] = None,
) -> list[IrResult]:
    """Compute many requests, results in input order.

    Args:
        requests: Requests to compute
        settings: Fiscal settings shared by every computation
        max_workers: Worker processes (AppSettings.batch_max_workers when None);
            1 runs sequentially in the calling process

    Raises:
        InvalidParameterError: max_workers below 1
    """
    if max_workers is None:
        max_workers = get_settings().batch_max_workers
    if max_workers < 1:
        raise InvalidParameterError("max_workers", max_workers, "must be >= 1")

    requests = list(requests)
    if max_workers == 1 or len(requests) <= 1:
        engine = IncomeTaxEngine(settings)
        results = [engine.compute(r) for r in requests]
        mode = "sequential"
    else:
        chunksize = max(1, len(requests) // (max_workers * 4))
        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            results = list(
                executor.map(
                    compute_ir_worker,
                    [(r, settings) for r in requests],
                    chunksize=chunksize,
                )
            )
        mode = "processes"

    log.info("batch_evaluation_completed", count=len(results), workers=max_workers, mode=mode)
    return results


def compare_years(request: IrRequest, settings: TaxYearSettings) -> dict[str, IrResult]:
    """Compute the same household with the current and the previous year rules."""
    engine = IncomeTaxEngine(settings)
    return {
        year_key: engine.compute(request.model_copy(update={"year_key": year_key}))
        for year_key in ("current", "previous")
    }


def results_to_dataframe(
    results: Sequence[IrResult],
    labels: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """Tabulate headline figures, one row per result.

    Args:
        results: Results to export
        labels: Optional row labels (same length as results)

    Raises:
        InvalidParameterError: labels and results lengths differ
    """
    if labels is not None and len(labels) != len(results):
        raise InvalidParameterError("labels", len(labels), f"expected {len(results)} labels")

    rows = [{column: getattr(r, field) for field, column in DATAFRAME_COLUMNS.items()} for r in results]
    df = pd.DataFrame(rows, columns=list(DATAFRAME_COLUMNS.values()))
    if labels is not None:
        df.index = pd.Index(list(labels), name="Cas")
    return df
