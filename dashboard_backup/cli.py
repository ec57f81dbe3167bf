"""
Command-line interface for the Dashboard Backup Tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, List

from . import __version__
from .config.manager import ConfigurationManager
from .orchestrator import DashboardBackupOrchestrator
from .services.decryption import encrypt
from .models.exceptions import (
    ConfigurationError,
    DecryptionError,
    CredentialsFormatError,
    DashboardBackupError
)


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """
    Setup logging configuration based on verbosity level.
    
    Args:
        verbose: Enable verbose (DEBUG) logging
        log_file: Optional log file path
    """
    log_level = logging.DEBUG if verbose else logging.INFO
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    
    # Configure root logger
    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[],
        force=True
    )
    
    # Add console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_formatter = logging.Formatter(log_format)
    console_handler.setFormatter(console_formatter)
    logging.getLogger().addHandler(console_handler)
    
    # Add file handler if specified
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(log_level)
        file_formatter = logging.Formatter(log_format)
        file_handler.setFormatter(file_formatter)
        logging.getLogger().addHandler(file_handler)


def validate_config_file(config_path: str) -> str:
    """
    Validate that the configuration file exists and is readable.
    
    Args:
        config_path: Path to configuration file
        
    Returns:
        str: Absolute path to configuration file
        
    Raises:
        argparse.ArgumentTypeError: If file doesn't exist or isn't readable
    """
    path = Path(config_path)
    
    if not path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")
    
    if not path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")
    
    if not path.suffix.lower() in ['.yaml', '.yml', '.json']:
        raise argparse.ArgumentTypeError(f"Configuration file must be YAML or JSON: {config_path}")
    
    try:
        with open(path, 'r') as f:
            f.read(1)
    except PermissionError:
        raise argparse.ArgumentTypeError(f"Configuration file is not readable: {config_path}")
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error accessing configuration file: {e}")
    
    return str(path.absolute())


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.
    
    Returns:
        argparse.ArgumentParser: Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog='dashboard-backup',
        description='Dashboard Backup Tool - Export New Relic dashboards of many accounts to JSON files',
        epilog='''
Examples:
  %(prog)s
  %(prog)s --config config.yaml --verbose
  %(prog)s --credentials accounts_keys.enc --private-key private_key.pem --output-dir ./backups
  %(prog)s --encrypt-csv accounts.csv --public-key public_key.pem
  %(prog)s --init-config config.yaml
        ''',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    
    parser.add_argument(
        '--config', '-c',
        type=validate_config_file,
        help='Path to configuration file (YAML or JSON format)'
    )
    
    # Path overrides
    parser.add_argument(
        '--credentials',
        type=str,
        help='Encrypted credentials file (default: ./accounts_keys.enc)'
    )
    
    parser.add_argument(
        '--private-key',
        type=str,
        help='PEM private key paired with the credentials file (default: ./private_key.pem)'
    )
    
    parser.add_argument(
        '--output-dir', '-o',
        type=str,
        help='Directory for dashboard JSON files (default: ./dashboards_output)'
    )
    
    parser.add_argument(
        '--region',
        choices=['US', 'EU'],
        help='NerdGraph region (default: US)'
    )
    
    # Logging options
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose (DEBUG) logging'
    )
    
    parser.add_argument(
        '--log-file',
        type=str,
        help='Path to log file (logs to console only if not specified)'
    )
    
    # Report options
    parser.add_argument(
        '--generate-manifest',
        action='store_true',
        help='Write a JSON manifest of the written files to the output directory'
    )
    
    parser.add_argument(
        '--generate-report',
        action='store_true',
        help='Write a human-readable backup report to the output directory'
    )
    
    parser.add_argument(
        '--fail-on-partial',
        action='store_true',
        help='Exit with status 2 when any account or dashboard failed'
    )
    
    # Utility commands
    parser.add_argument(
        '--init-config',
        metavar='PATH',
        help='Write a sample configuration file and exit'
    )
    
    parser.add_argument(
        '--encrypt-csv',
        metavar='CSV',
        help='Encrypt a credentials CSV into the credentials file and exit (requires --public-key)'
    )
    
    parser.add_argument(
        '--public-key',
        metavar='PEM',
        help='PEM public key used by --encrypt-csv'
    )
    
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    
    return parser


def encrypt_credentials(csv_path: str, public_key_path: str, output_path: str) -> None:
    """Encrypt a plaintext credentials CSV into the credentials file."""
    plaintext = Path(csv_path).read_text(encoding='utf-8')
    public_key_pem = Path(public_key_path).read_text(encoding='utf-8')
    
    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(encrypt(plaintext, public_key_pem), encoding='utf-8')


def execute_backup(args: argparse.Namespace) -> int:
    """
    Execute the backup operation based on CLI arguments.
    
    Args:
        args: Parsed command line arguments
        
    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    logger = logging.getLogger(__name__)
    orchestrator = None
    
    try:
        config = ConfigurationManager().load_config(args.config, overrides={
            'credentials_path': args.credentials,
            'private_key_path': args.private_key,
            'output_dir': args.output_dir,
            'region': args.region,
            'logging_level': 'DEBUG' if args.verbose else None
        })
        
        if args.encrypt_csv:
            if not args.public_key:
                print("--encrypt-csv requires --public-key", file=sys.stderr)
                return 1
            encrypt_credentials(args.encrypt_csv, args.public_key, config.credentials_path)
            print(f"✓ Encrypted credentials written to {config.credentials_path}")
            return 0
        
        orchestrator = DashboardBackupOrchestrator(config)
        orchestrator.initialize()
        
        backup_report = orchestrator.execute_backup()
        
        output_dir = Path(config.output_dir)
        timestamp = backup_report.start_time.strftime('%Y%m%d_%H%M%S')
        
        if args.generate_manifest:
            orchestrator.generate_backup_manifest(str(output_dir / f"backup_manifest_{timestamp}.json"))
        
        if args.generate_report:
            orchestrator.save_backup_report(str(output_dir / f"backup_report_{timestamp}.txt"))
        
        print("\n" + "="*60)
        print("BACKUP COMPLETED")
        print("="*60)
        print(f"Accounts: {backup_report.total_accounts}")
        print(f"Dashboards Written: {backup_report.dashboards_written}")
        print(f"Execution Time: {backup_report.total_execution_time:.2f}s")
        
        if backup_report.is_partial:
            print(f"⚠ {backup_report.failed_accounts} accounts and "
                  f"{backup_report.dashboards_failed} dashboards failed")
            if args.fail_on_partial:
                return 2  # Partial success
        else:
            print("✓ All dashboards backed up successfully")
        
        return 0
        
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print(f"Configuration Error: {e}", file=sys.stderr)
        print("Please check your configuration file and try again.", file=sys.stderr)
        return 1
        
    except DecryptionError as e:
        logger.error(f"Decryption error: {e}")
        print(f"Decryption Error: {e}", file=sys.stderr)
        print("Please check the credentials file and private key.", file=sys.stderr)
        return 1
        
    except CredentialsFormatError as e:
        logger.error(f"Credentials error: {e}")
        print(f"Credentials Error: {e}", file=sys.stderr)
        return 1
        
    except DashboardBackupError as e:
        logger.error(f"Backup error: {e}")
        print(f"Backup Error: {e}", file=sys.stderr)
        return 1
        
    except KeyboardInterrupt:
        logger.warning("Backup interrupted by user")
        print("\nBackup interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT
        
    except Exception as e:
        logger.error(f"Error during execution: {e}", exc_info=True)
        print(f"Unexpected Error: {e}", file=sys.stderr)
        print("Please check the logs for more details.", file=sys.stderr)
        return 1
    
    finally:
        if orchestrator is not None:
            orchestrator.close()


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI application.
    
    Args:
        argv: Argument list (defaults to sys.argv[1:])
    
    Returns:
        int: Exit code
    """
    parser = create_argument_parser()
    
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return e.code
    
    setup_logging(verbose=args.verbose, log_file=args.log_file)
    
    if args.init_config:
        ConfigurationManager().create_sample_config(args.init_config)
        print(f"✓ Sample configuration written to {args.init_config}")
        return 0
    
    return execute_backup(args)


if __name__ == '__main__':
    sys.exit(main())
