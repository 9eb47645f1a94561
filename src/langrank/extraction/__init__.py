# ABOUTME: Ranking extraction from external sources (browser sessions and per-source parsing)
# ABOUTME: Pipeline Stage 1: web pages → ranked entry sequences

"""
Extraction Layer: Get ranked lists from external sources

This layer handles:
- Browser engine lifecycle and per-source sessions
- Per-source parsing rules (table traversal, numbered-list matching)
- Top-N filtering and reversal policies

Data Flow: Web pages → RankedEntry sequences → Core layer
"""

# Import submodules directly, e.g. ``from langrank.extraction.sources import SOURCES``;
# the session module depends on utils.retry, which in turn imports extraction.base.
