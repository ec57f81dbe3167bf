"""
Client for the New Relic NerdGraph (GraphQL) API.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import requests

from ..models.credentials import DashboardReference
from ..models.exceptions import TransportError, QueryError


logger = logging.getLogger(__name__)


def dashboards_query(account_id: str) -> str:
    """Entity search for all dashboards of one account."""
    return """
{
  actor {
    entitySearch(query: "type = 'DASHBOARD' AND accountId = %s") {
      results {
        entities {
          guid
          name
        }
      }
    }
  }
}""" % account_id


def dashboard_detail_query(guid: str) -> str:
    """Full page and widget definition of one dashboard."""
    return """
{
  actor {
    entity(guid: "%s") {
      ... on DashboardEntity {
        permissions
        pages {
          name
          widgets {
            visualization { id }
            title
            layout { row width height column }
            rawConfiguration
            id
            linkedEntities { guid }
          }
          guid
          description
        }
        name
        description
      }
    }
  }
}""" % guid


class NerdGraphClient:
    """Executes GraphQL queries against NerdGraph with a per-call API key."""
    
    def __init__(self, endpoint: str, session: Optional[requests.Session] = None):
        self.endpoint = endpoint
        self.session = session or requests.Session()
    
    def execute(self, query: str, api_key: str) -> Dict[str, Any]:
        """
        Execute a GraphQL query.
        
        Args:
            query: GraphQL query text
            api_key: User API key of the account being queried
            
        Returns:
            Dict[str, Any]: The data member of the response
            
        Raises:
            TransportError: On network failures, non-2xx responses and
                non-JSON bodies
            QueryError: When the response carries an errors payload
        """
        headers = {
            'Content-Type': 'application/json',
            'API-Key': api_key
        }
        
        try:
            response = self.session.post(self.endpoint, headers=headers, json={'query': query})
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request to {self.endpoint} failed: {str(e)}")
        
        if not response.ok:
            raise TransportError(
                f"HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text
            )
        
        try:
            result = response.json()
        except ValueError as e:
            raise TransportError(
                f"Invalid JSON in NerdGraph response: {str(e)}",
                status_code=response.status_code,
                body=response.text
            )

        if not isinstance(result, dict):
            raise TransportError("Unexpected NerdGraph response shape",
                                 status_code=response.status_code, body=response.text)

        if result.get('errors') is not None:
            logger.error(f"GraphQL Errors: {json.dumps(result['errors'], indent=2)}")
            raise QueryError("GraphQL query failed", errors=result['errors'])
        
        return result.get('data') or {}
    
    def list_dashboards(self, account_id: str, api_key: str) -> List[DashboardReference]:
        """
        List the dashboards of an account.
        
        Only the first page of entity search results is read.
        """
        data = self.execute(dashboards_query(account_id), api_key)
        entity_search = (data.get('actor') or {}).get('entitySearch') or {}
        entities = (entity_search.get('results') or {}).get('entities') or []
        return [DashboardReference.from_api(entity) for entity in entities]
    
    def get_dashboard(self, guid: str, api_key: str) -> Optional[Dict[str, Any]]:
        """Fetch the raw DashboardEntity for a guid (None if not found)."""
        data = self.execute(dashboard_detail_query(guid), api_key)
        return (data.get('actor') or {}).get('entity')
