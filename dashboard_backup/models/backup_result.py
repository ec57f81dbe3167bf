"""
Data models for backup operation results.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List
from enum import Enum


class BackupStatus(Enum):
    """Status enumeration for backup operations."""
    SUCCESS = "success"
    FAILED = "failed"
    PARTIAL = "partial"
    IN_PROGRESS = "in_progress"


@dataclass
class BackupResult:
    """Result of backing up the dashboards of one account."""
    
    account_id: str
    success: bool = True
    items_processed: int = 0
    items_failed: int = 0
    items_skipped: int = 0
    written_files: List[str] = field(default_factory=list)
    error_messages: List[str] = field(default_factory=list)
    execution_time: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)
    status: BackupStatus = BackupStatus.IN_PROGRESS
    
    def add_written_file(self, file_path: str) -> None:
        """Record a dashboard file written for this account."""
        self.written_files.append(file_path)
        self.items_processed += 1
    
    def add_error(self, error_message: str) -> None:
        """Add an error message to the result."""
        self.error_messages.append(error_message)
        self.items_failed += 1
    
    def finalize(self) -> None:
        """Derive the final status from the processed and failed counters."""
        if self.items_failed == 0:
            self.status = BackupStatus.SUCCESS
            self.success = True
        elif self.items_processed > 0:
            self.status = BackupStatus.PARTIAL
            self.success = False
        else:
            self.status = BackupStatus.FAILED
            self.success = False


@dataclass
class BackupReport:
    """Report of a backup run over all accounts."""
    
    total_accounts: int
    successful_accounts: int
    failed_accounts: int
    partial_accounts: int
    total_execution_time: float
    start_time: datetime
    end_time: datetime
    results: List[BackupResult] = field(default_factory=list)
    
    @property
    def dashboards_written(self) -> int:
        return sum(r.items_processed for r in self.results)
    
    @property
    def dashboards_failed(self) -> int:
        return sum(r.items_failed for r in self.results)
    
    @property
    def is_partial(self) -> bool:
        """True when any account or dashboard failed."""
        return self.failed_accounts > 0 or self.partial_accounts > 0
    
    def add_result(self, result: BackupResult) -> None:
        """Add a backup result to the report."""
        self.results.append(result)
        self.total_accounts += 1
        if result.status == BackupStatus.SUCCESS:
            self.successful_accounts += 1
        elif result.status == BackupStatus.FAILED:
            self.failed_accounts += 1
        elif result.status == BackupStatus.PARTIAL:
            self.partial_accounts += 1
