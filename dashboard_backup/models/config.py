"""
Configuration data models for dashboard backup operations.
"""

from dataclasses import dataclass
from typing import Optional, List
import re


NERDGRAPH_ENDPOINTS = {
    'US': 'https://api.newrelic.com/graphql',
    'EU': 'https://api.eu.newrelic.com/graphql',
}


@dataclass
class BackupConfig:
    """Configuration settings for dashboard backup operations."""
    
    # Input files
    credentials_path: str = "./accounts_keys.enc"
    private_key_path: str = "./private_key.pem"
    
    # Output
    output_dir: str = "./dashboards_output"
    
    # NerdGraph Configuration
    region: str = "US"
    endpoint: Optional[str] = None  # Overrides the region endpoint when set
    
    # Logging Configuration
    logging_level: str = "INFO"
    logging_file_path: Optional[str] = None
    
    @property
    def nerdgraph_endpoint(self) -> str:
        """The GraphQL endpoint to query, honouring an explicit override."""
        if self.endpoint:
            return self.endpoint
        return NERDGRAPH_ENDPOINTS[self.region.upper()]
    
    def validate(self) -> List[str]:
        """
        Validate configuration settings and return list of validation errors.
        
        Returns:
            List[str]: List of validation error messages. Empty if valid.
        """
        errors = []
        
        errors.extend(self._validate_paths())
        errors.extend(self._validate_nerdgraph_settings())
        errors.extend(self._validate_logging_settings())
        
        return errors
    
    def _validate_paths(self) -> List[str]:
        """Validate input and output path settings."""
        errors = []
        
        if not self.credentials_path:
            errors.append("Credentials file path is required")
        if not self.private_key_path:
            errors.append("Private key file path is required")
        if not self.output_dir:
            errors.append("Output directory is required")
        
        return errors
    
    def _validate_nerdgraph_settings(self) -> List[str]:
        """Validate NerdGraph region and endpoint settings."""
        errors = []
        
        if not self.region:
            errors.append("NerdGraph region is required")
        elif self.region.upper() not in NERDGRAPH_ENDPOINTS:
            errors.append(f"NerdGraph region must be one of: {', '.join(NERDGRAPH_ENDPOINTS)}")
        
        if self.endpoint and not re.match(r'^https?://[^\s/]+', self.endpoint):
            errors.append("NerdGraph endpoint must be an http(s) URL")
        
        return errors
    
    def _validate_logging_settings(self) -> List[str]:
        """Validate logging configuration settings."""
        errors = []
        
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.logging_level not in valid_levels:
            errors.append(f"Logging level must be one of: {', '.join(valid_levels)}")
        
        return errors
