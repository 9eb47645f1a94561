# ABOUTME: Cross-cutting utilities and shared infrastructure
# ABOUTME: Supporting services: logging, retry, rich console tables

"""
Utils Layer: Shared infrastructure and cross-cutting concerns

This layer provides:
- Logging configuration and progress tracking
- Navigation retry policy
- Rich tables for CLI summaries

Data Flow: Supporting services for all other layers
"""

from . import logging

__all__ = [
    "logging",
]
