"""
Data models for dashboard backup operations.
"""

from .config import BackupConfig, NERDGRAPH_ENDPOINTS
from .backup_result import BackupResult, BackupReport, BackupStatus
from .credentials import CredentialRecord, DashboardReference
from .dashboard import (
    DashboardRecord,
    Page,
    Widget,
    DEFAULT_PERMISSIONS,
    linked_entity_guids,
    transform
)
from .exceptions import (
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
    "BackupConfig",
    "NERDGRAPH_ENDPOINTS",
    "BackupResult",
    "BackupReport",
    "BackupStatus",
    "CredentialRecord",
    "DashboardReference",
    "DashboardRecord",
    "Page",
    "Widget",
    "DEFAULT_PERMISSIONS",
    "linked_entity_guids",
    "transform",
    "DashboardBackupError",
    "ConfigurationError",
    "DecryptionError",
    "CredentialsFormatError",
    "NerdGraphError",
    "TransportError",
    "QueryError",
    "OutputError"
]
