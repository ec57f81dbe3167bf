"""
Data models for exported New Relic dashboards.

The records built here follow the JSON layout produced by the New Relic UI
"Copy JSON to clipboard" export, so backups can be re-imported as is.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any


DEFAULT_PERMISSIONS = "PUBLIC_READ_WRITE"


def linked_entity_guids(linked_entities: Optional[List[Dict[str, Any]]]) -> List[str]:
    """
    Project a widget's linkedEntities relation down to its guids.
    
    Args:
        linked_entities: List of related entity dictionaries, or None
        
    Returns:
        List[str]: guids in their original order
    """
    if not linked_entities:
        return []
    return [(entity or {}).get('guid') for entity in linked_entities]


@dataclass
class Widget:
    """Single visualization unit within a dashboard page."""
    
    visualization: Dict[str, Any] = field(default_factory=dict)
    title: str = ""
    layout: Dict[str, Any] = field(default_factory=dict)
    raw_configuration: Dict[str, Any] = field(default_factory=dict)
    id: str = ""
    linked_entity_guids: List[str] = field(default_factory=list)
    
    @classmethod
    def from_api(cls, api_response: Dict[str, Any]) -> 'Widget':
        """
        Create Widget instance from a NerdGraph widget.
        
        linkedEntityGuids is always derived from linkedEntities when the
        relation is present; an already flattened linkedEntityGuids list
        is only used otherwise.
        """
        if api_response.get('linkedEntities') is not None:
            guids = linked_entity_guids(api_response['linkedEntities'])
        else:
            guids = list(api_response.get('linkedEntityGuids') or [])
        
        return cls(
            visualization=api_response.get('visualization') or {},
            title=api_response.get('title') or "",
            layout=api_response.get('layout') or {},
            raw_configuration=api_response.get('rawConfiguration') or {},
            id=api_response.get('id') or "",
            linked_entity_guids=guids
        )
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            'visualization': self.visualization,
            'title': self.title,
            'layout': self.layout,
            'rawConfiguration': self.raw_configuration,
            'id': self.id,
            'linkedEntityGuids': self.linked_entity_guids
        }


@dataclass
class Page:
    """Dashboard page holding an ordered list of widgets."""
    
    name: str = ""
    guid: str = ""
    description: str = ""
    widgets: List[Widget] = field(default_factory=list)
    
    @classmethod
    def from_api(cls, api_response: Dict[str, Any]) -> 'Page':
        return cls(
            name=api_response.get('name') or "",
            guid=api_response.get('guid') or "",
            description=api_response.get('description') or "",
            widgets=[Widget.from_api(widget) for widget in (api_response.get('widgets') or [])]
        )
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'guid': self.guid,
            'description': self.description,
            'widgets': [widget.to_dict() for widget in self.widgets]
        }


@dataclass
class DashboardRecord:
    """Canonical export record for one dashboard."""
    
    name: str
    description: str = ""
    permissions: str = DEFAULT_PERMISSIONS
    pages: List[Page] = field(default_factory=list)
    
    @classmethod
    def from_api(cls, api_response: Optional[Dict[str, Any]], fallback_name: str = "") -> 'DashboardRecord':
        """
        Create DashboardRecord instance from a NerdGraph DashboardEntity.
        
        Every field absent from the response (or null/empty) takes its
        export default, so the record is always fully shaped. The input
        dictionary is not modified.
        
        Args:
            api_response: actor.entity dictionary from the detail query
            fallback_name: Name from the entity search, used when the
                detail response has none
            
        Returns:
            DashboardRecord: Fully populated record
        """
        api_response = api_response or {}
        
        return cls(
            name=api_response.get('name') or fallback_name,
            description=api_response.get('description') or "",
            permissions=api_response.get('permissions') or DEFAULT_PERMISSIONS,
            pages=[Page.from_api(page) for page in (api_response.get('pages') or [])]
        )
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DashboardRecord':
        """Rebuild a record from its exported JSON form."""
        return cls.from_api(data, fallback_name=data.get('name', ''))
    
    def to_dict(self) -> Dict[str, Any]:
        """
        Convert DashboardRecord to the export JSON structure.
        
        Returns:
            Dict[str, Any]: Dictionary with export key names and ordering
        """
        return {
            'name': self.name,
            'description': self.description,
            'permissions': self.permissions,
            'pages': [page.to_dict() for page in self.pages]
        }
    
    @property
    def widget_count(self) -> int:
        return sum(len(page.widgets) for page in self.pages)


def transform(raw_entity: Optional[Dict[str, Any]], fallback_name: str) -> DashboardRecord:
    """
    Reshape a raw dashboard detail response into the export schema.
    
    Args:
        raw_entity: actor.entity from the detail query (may be None)
        fallback_name: Dashboard name from the listing step
        
    Returns:
        DashboardRecord: Record with all defaults applied
    """
    return DashboardRecord.from_api(raw_entity, fallback_name)
