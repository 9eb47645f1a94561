# ABOUTME: Business logic and orchestration layer
# ABOUTME: Pipeline Stage 2: per-source rankings → merged comparison tables

"""
Core Layer: Aggregation and reconciliation

This layer handles:
- Concurrent, failure-isolated execution of every source
- Index-aligned merging of paired rankings
- Pipeline orchestration from scraping to report model

Data Flow: extraction/ rankings → merged tables → report/ model
"""

from .merge import merge
from .models import (
    AXIS_PAIRINGS,
    MISSING_LABEL,
    CombinedRow,
    ComparisonAxis,
    ProgressEvent,
    SourceFailure,
    SourceResult,
    SourceSuccess,
)

# Import the orchestrator and pipeline on demand to avoid loading the browser stack:
# from langrank.core.pipeline import RankingPipeline

__all__ = [
    "AXIS_PAIRINGS",
    "MISSING_LABEL",
    "CombinedRow",
    "ComparisonAxis",
    "ProgressEvent",
    "SourceFailure",
    "SourceResult",
    "SourceSuccess",
    "merge",
]
