"""
Data models for account credentials and dashboard references.
"""

from dataclasses import dataclass, field
from typing import Dict, Any


@dataclass(frozen=True)
class CredentialRecord:
    """One account's NerdGraph credentials, as read from the credentials table."""
    
    account_id: str
    api_key: str = field(repr=False)


@dataclass(frozen=True)
class DashboardReference:
    """Dashboard identity returned by the entity search."""
    
    guid: str
    name: str
    
    @classmethod
    def from_api(cls, api_response: Dict[str, Any]) -> 'DashboardReference':
        """
        Create DashboardReference instance from an entitySearch entity.
        
        Args:
            api_response: Entity dictionary from the NerdGraph entity search
            
        Returns:
            DashboardReference: Reference with guid and name populated
        """
        return cls(
            guid=api_response.get('guid') or '',
            name=api_response.get('name') or ''
        )
