"""
Run logging for dashboard backups.

Console output is configured by cli.setup_logging. This service adds an
optional JSON-lines log file and the per-account progress lines of a run.
"""

import logging
import logging.handlers
import json
from datetime import datetime
from typing import Optional
from pathlib import Path

from ..models.backup_result import BackupResult, BackupReport
from ..models.config import BackupConfig


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record, with the record's context dict merged in."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage()
        }

        context = getattr(record, 'context', None)
        if context:
            entry['context'] = context

        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


class LoggingService:
    """Logs account-level progress of a backup run."""

    def __init__(self, config: BackupConfig):
        """
        Args:
            config: Backup configuration containing logging settings
        """
        self.config = config
        self._file_handler: Optional[logging.Handler] = None
        self.logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        logger = logging.getLogger('dashboard_backup')
        logger.setLevel(getattr(logging, self.config.logging_level.upper()))

        if self.config.logging_file_path:
            Path(self.config.logging_file_path).parent.mkdir(parents=True, exist_ok=True)

            self._file_handler = logging.handlers.RotatingFileHandler(
                self.config.logging_file_path,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding='utf-8'
            )
            self._file_handler.setFormatter(JsonLineFormatter())
            logger.addHandler(self._file_handler)

        return logger

    def account_started(self, account_id: str, position: int, total: int) -> None:
        """Log the start of an account, e.g. 'Account 2/5 (12345)'."""
        self.logger.info(
            f"Account {position}/{total} ({account_id})",
            extra={'context': {'account_id': account_id, 'position': position, 'total': total}}
        )

    def account_finished(self, result: BackupResult) -> None:
        """Log dashboard counts of a finished account at a level matching its status."""
        context = {
            'account_id': result.account_id,
            'status': result.status.value,
            'dashboards_written': result.items_processed,
            'dashboards_failed': result.items_failed,
            'dashboards_skipped': result.items_skipped,
            'execution_time': result.execution_time
        }
        message = (
            f"Account {result.account_id}: {result.items_processed} dashboards written, "
            f"{result.items_failed} failed, {result.items_skipped} skipped"
        )

        if result.success:
            self.logger.info(message, extra={'context': context})
        else:
            context['error_messages'] = result.error_messages
            self.logger.error(message, extra={'context': context})

    def account_failed(self, account_id: str, error: Exception) -> None:
        """Log an account whose dashboards could not be listed."""
        self.logger.error(
            f"Failed to list dashboards for account {account_id}: {str(error)}",
            extra={'context': {
                'account_id': account_id,
                'error_type': type(error).__name__,
                'error_message': str(error)
            }}
        )

    def run_finished(self, report: BackupReport) -> None:
        """Log the totals of a run."""
        self.logger.info(
            f"Backup finished: {report.dashboards_written} dashboards written, "
            f"{report.dashboards_failed} failed across {report.total_accounts} accounts "
            f"({report.total_execution_time:.2f}s)",
            extra={'context': {
                'accounts': report.total_accounts,
                'failed_accounts': report.failed_accounts,
                'partial_accounts': report.partial_accounts,
                'dashboards_written': report.dashboards_written,
                'dashboards_failed': report.dashboards_failed
            }}
        )

    def close(self) -> None:
        """Close the file handler added by this service."""
        if self._file_handler is not None:
            self.logger.removeHandler(self._file_handler)
            self._file_handler.close()
            self._file_handler = None
