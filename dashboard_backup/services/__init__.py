"""
Service classes for dashboard backup operations.
"""

from .base import BaseBackupService
from .credentials import parse_credentials
from .dashboard_backup import DashboardBackupService, sanitize_dashboard_name, is_exportable
from .decryption import decode, decrypt_credentials_file, encrypt
from .logging import LoggingService
from .nerdgraph import NerdGraphClient, dashboards_query, dashboard_detail_query
from .validation import validate_dashboard_structure

__all__ = [
    "BaseBackupService",
    "parse_credentials",
    "DashboardBackupService",
    "sanitize_dashboard_name",
    "is_exportable",
    "decode",
    "decrypt_credentials_file",
    "encrypt",
    "LoggingService",
    "NerdGraphClient",
    "dashboards_query",
    "dashboard_detail_query",
    "validate_dashboard_structure"
]
