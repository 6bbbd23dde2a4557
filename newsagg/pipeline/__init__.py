"""Sync pipeline."""

from .orchestrator import SyncOrchestrator, SyncResult, print_sync_summary

__all__ = ["SyncOrchestrator", "SyncResult", "print_sync_summary"]
