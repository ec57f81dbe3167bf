"""
Service for backing up the dashboards of one New Relic account.
"""

import json
import logging
import re
import time
from pathlib import Path
from typing import Optional, Set

from dashboard_backup.models.backup_result import BackupResult
from dashboard_backup.models.config import BackupConfig
from dashboard_backup.models.credentials import CredentialRecord, DashboardReference
from dashboard_backup.models.dashboard import DashboardRecord, transform
from dashboard_backup.models.exceptions import OutputError
from dashboard_backup.services.base import BaseBackupService
from dashboard_backup.services.nerdgraph import NerdGraphClient
from dashboard_backup.services.validation import validate_dashboard_structure


logger = logging.getLogger(__name__)

_FORBIDDEN_CHARS = re.compile(r'[\\/:"*?<>|]+')
_WHITESPACE = re.compile(r'\s+')


def sanitize_dashboard_name(name: str) -> str:
    """
    Make a dashboard name safe to use in a file name.
    
    Each run of \\ / : " * ? < > | becomes a single underscore, then each
    run of whitespace does too.
    """
    return _WHITESPACE.sub('_', _FORBIDDEN_CHARS.sub('_', name))


def is_exportable(reference: DashboardReference) -> bool:
    """Names containing '/' are page or folder entries, not dashboards."""
    return '/' not in reference.name


class DashboardBackupService(BaseBackupService):
    """Service for exporting dashboards to JSON files in the output directory."""
    
    def __init__(self, config: BackupConfig, client: Optional[NerdGraphClient] = None):
        super().__init__(config, client)
        self.output_dir = Path(config.output_dir)
        self._written_paths: Set[Path] = set()
    
    def _create_client(self) -> NerdGraphClient:
        return NerdGraphClient(self.config.nerdgraph_endpoint)
    
    def validate_prerequisites(self) -> bool:
        """Create the output directory if needed."""
        try:
            if not self.output_dir.exists():
                self.output_dir.mkdir(parents=True, exist_ok=True)
                logger.info(f"Created folder: {self.output_dir}")
            elif not self.output_dir.is_dir():
                logger.error(f"Output path is not a directory: {self.output_dir}")
                return False
            return True
        except OSError as e:
            logger.error(f"Cannot create output directory {self.output_dir}: {str(e)}")
            return False
    
    def backup_account(self, credential: CredentialRecord) -> BackupResult:
        """
        Export every dashboard of an account.
        
        Listing failures propagate to the caller. Failures on a single
        dashboard are recorded in the result and the next dashboard is
        processed.
        
        Args:
            credential: Account id and API key
            
        Returns:
            BackupResult: Result of the account backup
        """
        start_time = time.time()
        result = BackupResult(account_id=credential.account_id)
        client = self.get_client()
        
        logger.info(f"Searching dashboards for account {credential.account_id}...")
        references = client.list_dashboards(credential.account_id, credential.api_key)
        dashboards = [ref for ref in references if is_exportable(ref)]
        result.items_skipped = len(references) - len(dashboards)
        
        logger.info(f"Found {len(dashboards)} dashboards for account {credential.account_id}.")
        if result.items_skipped:
            logger.debug(f"Ignored {result.items_skipped} entries with '/' in their name")
        
        for reference in dashboards:
            logger.info(f"Fetching dashboard \"{reference.name}\" ({reference.guid})...")
            try:
                file_path = self.export_dashboard(credential, reference)
                result.add_written_file(str(file_path))
            except Exception as e:
                logger.error(f"Failed to fetch dashboard {reference.guid}: {str(e)}")
                result.add_error(f"{reference.guid} ({reference.name}): {str(e)}")
        
        result.finalize()
        result.execution_time = time.time() - start_time
        return result
    
    def export_dashboard(self, credential: CredentialRecord, reference: DashboardReference) -> Path:
        """
        Fetch, reshape, write and validate one dashboard.
        
        Returns:
            Path: The written file
        """
        raw_entity = self.get_client().get_dashboard(reference.guid, credential.api_key)
        record = transform(raw_entity, reference.name)
        
        file_path = self.resolve_output_path(credential.account_id, reference)
        exported = self.write_dashboard(record, file_path)
        self._written_paths.add(file_path)
        logger.info(f"Saved dashboard as {file_path}")
        
        validate_dashboard_structure(exported, str(file_path))
        return file_path
    
    def resolve_output_path(self, account_id: str, reference: DashboardReference) -> Path:
        """
        Build the output file path for a dashboard.
        
        When another dashboard was already written to the same path during this
        run, the dashboard guid is appended to keep both files.
        """
        base_name = f"{account_id}_{sanitize_dashboard_name(reference.name)}"
        file_path = self.output_dir / f"{base_name}.json"
        
        if file_path in self._written_paths:
            disambiguated = self.output_dir / f"{base_name}_{sanitize_dashboard_name(reference.guid)}.json"
            logger.warning(
                f"File name {file_path.name} already used in this run, "
                f"saving \"{reference.name}\" as {disambiguated.name}"
            )
            file_path = disambiguated
        
        return file_path
    
    def write_dashboard(self, record: DashboardRecord, file_path: Path) -> dict:
        """Serialize a record as pretty-printed JSON and return the written structure."""
        exported = record.to_dict()
        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                json.dump(exported, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise OutputError(f"Cannot write {file_path}: {str(e)}", context={'path': str(file_path)})
        return exported
