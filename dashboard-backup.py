"""
Command-line interface for the Dashboard Backup Tool.

This script provides a direct entry point for the Dashboard Backup Tool.
It delegates to the main CLI module in the package.
"""

import sys
from dashboard_backup.cli import main

if __name__ == '__main__':
    sys.exit(main())
