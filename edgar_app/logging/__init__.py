"""
Logging configuration and utilities for the EDGAR plugin parameters.
"""
from .config import configure_logging, get_logger, get_sync_logger, log_reconciliation

__all__ = ["configure_logging", "get_logger", "get_sync_logger", "log_reconciliation"]
