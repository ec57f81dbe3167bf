"""
Custom exception classes for dashboard backup operations.
"""

from typing import Optional, Dict, Any, List


class DashboardBackupError(Exception):
    """Base exception for dashboard backup operations."""
    
    def __init__(self, message: str, error_code: Optional[str] = None, 
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}


class ConfigurationError(DashboardBackupError):
    """Exception raised for configuration-related errors."""
    pass


class DecryptionError(DashboardBackupError):
    """Exception raised when the credentials file cannot be decrypted."""
    pass


class CredentialsFormatError(DashboardBackupError):
    """Exception raised when the decrypted credentials table is unusable."""
    pass


class NerdGraphError(DashboardBackupError):
    """Base exception for NerdGraph API failures."""
    pass


class TransportError(NerdGraphError):
    """Exception raised for non-success HTTP responses and network failures."""
    
    def __init__(self, message: str, status_code: Optional[int] = None,
                 body: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.status_code = status_code
        self.body = body


class QueryError(NerdGraphError):
    """Exception raised when a GraphQL response carries an errors payload."""
    
    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []


class OutputError(DashboardBackupError):
    """Exception raised when a dashboard file cannot be written."""
    pass
