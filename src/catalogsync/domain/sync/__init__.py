"""Batch sync engine."""

from __future__ import annotations

from catalogsync.domain.sync.engine import BatchSync
from catalogsync.domain.sync.kinds import CHANNELS, KINDS, PRODUCTS, ResourceKind
from catalogsync.domain.sync.matching import MatchPair, match_drafts
from catalogsync.domain.sync.options import DEFAULT_BATCH_SIZE, SyncOptions
from catalogsync.domain.sync.statistics import SyncStatistics
from catalogsync.domain.sync.validation import DraftValidator, ValidationResult

__all__ = [
    "CHANNELS",
    "DEFAULT_BATCH_SIZE",
    "KINDS",
    "PRODUCTS",
    "BatchSync",
    "DraftValidator",
    "MatchPair",
    "ResourceKind",
    "SyncOptions",
    "SyncStatistics",
    "ValidationResult",
    "match_drafts",
]
