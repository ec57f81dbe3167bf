"""
Main backup orchestrator for dashboard backup operations.
"""

import json
import logging
import os
from datetime import datetime
from typing import List, Dict, Any, Optional
from pathlib import Path

from dashboard_backup import __version__
from dashboard_backup.models.config import BackupConfig
from dashboard_backup.models.credentials import CredentialRecord
from dashboard_backup.models.backup_result import BackupResult, BackupReport, BackupStatus
from dashboard_backup.services.credentials import parse_credentials
from dashboard_backup.services.dashboard_backup import DashboardBackupService
from dashboard_backup.services.decryption import decrypt_credentials_file
from dashboard_backup.services.logging import LoggingService
from dashboard_backup.services.nerdgraph import NerdGraphClient
from dashboard_backup.models.exceptions import DashboardBackupError


PASSPHRASE_ENV_VAR = 'DASHBOARD_BACKUP_PRIVATE_KEY_PASSPHRASE'


class DashboardBackupOrchestrator:
    """Main orchestrator class that drives the backup over all accounts."""
    
    def __init__(self, config: BackupConfig, client: Optional[NerdGraphClient] = None,
                 passphrase: Optional[str] = None):
        """
        Initialize the backup orchestrator.
        
        Args:
            config: Loaded backup configuration
            client: Optional NerdGraph client (one is built from the
                configured endpoint otherwise)
            passphrase: Passphrase of an encrypted private key; read from
                DASHBOARD_BACKUP_PRIVATE_KEY_PASSPHRASE when not given
        """
        self.config = config
        self.passphrase = passphrase if passphrase is not None else os.environ.get(PASSPHRASE_ENV_VAR)
        self.logger = logging.getLogger(__name__)
        self.logging_service: Optional[LoggingService] = None
        self.dashboard_service = DashboardBackupService(config, client)
        
        self.credentials: List[CredentialRecord] = []
        self.backup_results: List[BackupResult] = []
        self.backup_report: Optional[BackupReport] = None
    
    def initialize(self) -> bool:
        """
        Decrypt the credentials table and prepare the output directory.
        
        Returns:
            bool: True if initialization successful
            
        Raises:
            DecryptionError: If the credentials file cannot be decrypted
            CredentialsFormatError: If the decrypted table is unusable
        """
        try:
            self.logger.info("Initializing dashboard backup")
            self.logging_service = LoggingService(self.config)
            
            decrypted_csv = decrypt_credentials_file(
                self.config.credentials_path,
                self.config.private_key_path,
                self.passphrase
            )
            
            self.logger.info("Parsing decrypted CSV...")
            self.credentials = parse_credentials(decrypted_csv)
            
            if not self.dashboard_service.validate_prerequisites():
                raise DashboardBackupError(f"Output directory is not usable: {self.config.output_dir}")
            
            self.logger.info(f"Initialization completed, {len(self.credentials)} accounts to back up")
            return True
            
        except Exception as e:
            self.logger.error(f"Orchestrator initialization failed: {str(e)}")
            raise
    
    def execute_backup(self) -> BackupReport:
        """
        Back up the dashboards of every account, in credentials table order.
        
        A failure listing one account's dashboards is recorded and the run
        moves on to the next account.
        
        Returns:
            BackupReport: Report over all accounts
            
        Raises:
            DashboardBackupError: If the orchestrator is not initialized
        """
        if self.logging_service is None:
            raise DashboardBackupError("Orchestrator not initialized. Call initialize() first.")
        
        start_time = datetime.now()
        self.backup_results = []
        total = len(self.credentials)

        for position, credential in enumerate(self.credentials, start=1):
            self.logging_service.account_started(credential.account_id, position, total)
            result = self._execute_account_backup(credential)
            self.backup_results.append(result)

        self.backup_report = self._generate_backup_report(start_time, datetime.now())
        self.logging_service.run_finished(self.backup_report)
        
        if self.backup_report.is_partial:
            self.logger.warning("Dashboard backup completed with errors")
        else:
            self.logger.info("Dashboard backup completed successfully!")
        
        return self.backup_report
    
    def _execute_account_backup(self, credential: CredentialRecord) -> BackupResult:
        """
        Execute the backup of one account.
        
        Returns:
            BackupResult: Result of the account backup
        """
        try:
            result = self.dashboard_service.backup_account(credential)
            self.logging_service.account_finished(result)
            return result

        except Exception as e:
            self.logging_service.account_failed(credential.account_id, e)

            return BackupResult(
                account_id=credential.account_id,
                success=False,
                items_processed=0,
                items_failed=0,
                error_messages=[str(e)],
                timestamp=datetime.now(),
                status=BackupStatus.FAILED
            )
    
    def _generate_backup_report(self, start_time: datetime, end_time: datetime) -> BackupReport:
        """
        Generate the backup report from the account results.
        
        Args:
            start_time: Backup start time
            end_time: Backup end time
            
        Returns:
            BackupReport: Report over all accounts
        """
        report = BackupReport(
            total_accounts=0,
            successful_accounts=0,
            failed_accounts=0,
            partial_accounts=0,
            total_execution_time=(end_time - start_time).total_seconds(),
            start_time=start_time,
            end_time=end_time
        )
        for result in self.backup_results:
            report.add_result(result)
        return report
    
    def generate_backup_manifest(self, output_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Generate backup manifest listing all written dashboard files.
        
        Args:
            output_path: Optional path to save manifest file
            
        Returns:
            Dict[str, Any]: Backup manifest data
        """
        if not self.backup_report:
            raise DashboardBackupError("No backup report available. Execute backup first.")
        
        manifest = {
            'backup_metadata': {
                'timestamp': self.backup_report.start_time.isoformat(),
                'tool_version': __version__,
                'nerdgraph_endpoint': self.config.nerdgraph_endpoint,
                'output_dir': self.config.output_dir,
                'total_execution_time': self.backup_report.total_execution_time
            },
            'backup_summary': {
                'total_accounts': self.backup_report.total_accounts,
                'successful_accounts': self.backup_report.successful_accounts,
                'failed_accounts': self.backup_report.failed_accounts,
                'partial_accounts': self.backup_report.partial_accounts,
                'dashboards_written': self.backup_report.dashboards_written,
                'dashboards_failed': self.backup_report.dashboards_failed
            },
            'accounts': []
        }
        
        for result in self.backup_report.results:
            manifest['accounts'].append({
                'account_id': result.account_id,
                'status': result.status.value,
                'items_processed': result.items_processed,
                'items_failed': result.items_failed,
                'items_skipped': result.items_skipped,
                'execution_time': result.execution_time,
                'timestamp': result.timestamp.isoformat(),
                'files': result.written_files,
                'error_messages': result.error_messages
            })
        
        if output_path:
            self._save_manifest_to_file(manifest, output_path)
        
        return manifest
    
    def _save_manifest_to_file(self, manifest: Dict[str, Any], output_path: str) -> None:
        """
        Save backup manifest to JSON file.
        
        Args:
            manifest: Manifest data to save
            output_path: Path to save the manifest file
        """
        try:
            output_file = Path(output_path)
            output_file.parent.mkdir(parents=True, exist_ok=True)
            
            with open(output_file, 'w', encoding='utf-8') as f:
                json.dump(manifest, f, indent=2, default=str)
            
            self.logger.info(f"Backup manifest saved to: {output_path}")
            
        except OSError as e:
            self.logger.error(f"Failed to save backup manifest: {str(e)}")
            raise DashboardBackupError(f"Failed to save backup manifest: {str(e)}")
    
    def generate_backup_report_summary(self) -> str:
        """
        Generate a human-readable backup report summary.
        
        Returns:
            str: Formatted backup report summary
        """
        if not self.backup_report:
            raise DashboardBackupError("No backup report available. Execute backup first.")
        
        report_lines = [
            "=" * 60,
            "Dashboard Backup Report Summary",
            "=" * 60,
            f"Backup Date: {self.backup_report.start_time.strftime('%Y-%m-%d %H:%M:%S')}",
            f"NerdGraph Endpoint: {self.config.nerdgraph_endpoint}",
            f"Output Directory: {self.config.output_dir}",
            f"Total Execution Time: {self.backup_report.total_execution_time:.2f} seconds",
            "",
            "Overall Results:",
            f"  Accounts: {self.backup_report.total_accounts}",
            f"  Successful: {self.backup_report.successful_accounts}",
            f"  Failed: {self.backup_report.failed_accounts}",
            f"  Partial: {self.backup_report.partial_accounts}",
            f"  Dashboards Written: {self.backup_report.dashboards_written}",
            f"  Dashboards Failed: {self.backup_report.dashboards_failed}",
            "",
            "Account Details:",
            "-" * 40
        ]
        
        for result in self.backup_report.results:
            status_symbol = "✓" if result.status == BackupStatus.SUCCESS else "✗" if result.status == BackupStatus.FAILED else "⚠"
            
            report_lines.extend([
                f"{status_symbol} Account {result.account_id}:",
                f"    Status: {result.status.value}",
                f"    Dashboards Written: {result.items_processed}",
                f"    Dashboards Failed: {result.items_failed}",
                f"    Execution Time: {result.execution_time:.2f}s"
            ])
            
            if result.error_messages:
                report_lines.append("    Errors:")
                for error in result.error_messages:
                    report_lines.append(f"      - {error}")
            
            report_lines.append("")
        
        report_lines.append("=" * 60)
        return "\n".join(report_lines)
    
    def save_backup_report(self, output_path: str) -> None:
        """
        Save backup report summary to a text file.
        
        Args:
            output_path: Path to save the report file
        """
        report_summary = self.generate_backup_report_summary()
        
        try:
            output_file = Path(output_path)
            output_file.parent.mkdir(parents=True, exist_ok=True)
            
            with open(output_file, 'w', encoding='utf-8') as f:
                f.write(report_summary)
            
            self.logger.info(f"Backup report saved to: {output_path}")
            
        except OSError as e:
            self.logger.error(f"Failed to save backup report: {str(e)}")
            raise DashboardBackupError(f"Failed to save backup report: {str(e)}")
    
    def close(self) -> None:
        """Release logging handlers opened for this run."""
        if self.logging_service is not None:
            self.logging_service.close()
