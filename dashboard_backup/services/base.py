"""
Base interfaces and abstract classes for backup services.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional
from dashboard_backup.models.backup_result import BackupResult
from dashboard_backup.models.config import BackupConfig
from dashboard_backup.models.credentials import CredentialRecord


class BaseBackupService(ABC):
    """Abstract base class for per-account backup services."""
    
    def __init__(self, config: BackupConfig, client: Optional[Any] = None):
        self.config = config
        self._client = client
    
    @abstractmethod
    def backup_account(self, credential: CredentialRecord) -> BackupResult:
        """Execute the backup operation for one account."""
        pass
    
    @abstractmethod
    def validate_prerequisites(self) -> bool:
        """Validate that all prerequisites for backup are met."""
        pass
    
    def get_client(self) -> Any:
        """Get or create the API client."""
        if self._client is None:
            self._client = self._create_client()
        return self._client
    
    @abstractmethod
    def _create_client(self) -> Any:
        """Create the API client."""
        pass
