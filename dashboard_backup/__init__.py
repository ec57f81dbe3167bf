"""
New Relic Dashboard Backup Tool

Exports the dashboards of every account in an encrypted credentials file
to JSON files in the New Relic UI export format.
"""

__version__ = "1.0.0"
__author__ = "Dashboard Backup Tool"

from .config import ConfigurationManager
from .orchestrator import DashboardBackupOrchestrator
from .models import (
    BackupConfig,
    BackupResult,
    BackupReport,
    BackupStatus,
    CredentialRecord,
    DashboardReference,
    DashboardRecord,
    DashboardBackupError,
    ConfigurationError,
    DecryptionError,
    CredentialsFormatError,
    NerdGraphError,
    TransportError,
    QueryError,
    OutputError
)

__all__ = [
    "ConfigurationManager",
    "DashboardBackupOrchestrator",
    "BackupConfig",
    "BackupResult",
    "BackupReport",
    "BackupStatus",
    "CredentialRecord",
    "DashboardReference",
    "DashboardRecord",
    "DashboardBackupError",
    "ConfigurationError",
    "DecryptionError",
    "CredentialsFormatError",
    "NerdGraphError",
    "TransportError",
    "QueryError",
    "OutputError"
]
