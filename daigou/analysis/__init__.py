"""Mini README: Optional AI sales analysis.

The analyst sends a compact summary of the ledger to Gemini and returns
the reply as display text. It is an outside service: its failures never
reach the ledger.
"""

from .service import (
    AnalysisInProgressError,
    AnalysisUnavailableError,
    SalesAnalyst,
    build_analysis_rows,
    build_prompt,
)

__all__ = [
    "AnalysisInProgressError",
    "AnalysisUnavailableError",
    "SalesAnalyst",
    "build_analysis_rows",
    "build_prompt",
]
