"""
Parsing of the decrypted account credentials table.
"""

import csv
import io
import logging
from typing import Any, List, Dict, Optional, Sequence

from ..models.credentials import CredentialRecord
from ..models.exceptions import CredentialsFormatError


logger = logging.getLogger(__name__)

# Accepted header names, in precedence order
ACCOUNT_ID_ALIASES = ("accountNumber", "AccountID", "accountId")
API_KEY_ALIASES = ("apiKey", "ApiKey", "api_key")


def _resolve_columns(header: Sequence[str], aliases: Sequence[str]) -> List[str]:
    """Return header columns matching the aliases, in alias order, case-insensitively."""
    columns = []
    for alias in aliases:
        for column in header:
            if column.lower() == alias.lower() and column not in columns:
                columns.append(column)
    return columns


def _first_value(row: Dict[str, Optional[str]], columns: Sequence[str]) -> str:
    for column in columns:
        value = (row.get(column) or "").strip()
        if value:
            return value
    return ""


def _is_blank(row: Dict[Optional[str], Any]) -> bool:
    """True for rows whose cells are all empty or whitespace."""
    values = [value for column, value in row.items() if column is not None]
    values.extend(row.get(None) or [])
    return not any((value or "").strip() for value in values)


def parse_credentials(text: str) -> List[CredentialRecord]:
    """
    Parse the decrypted credentials CSV.
    
    Args:
        text: Header-first CSV text
        
    Returns:
        List[CredentialRecord]: Usable rows in table order
        
    Raises:
        CredentialsFormatError: If the table has no header or no account
            id / API key column
    """
    body = text.lstrip()
    if not body:
        raise CredentialsFormatError("Credentials table is empty")
    # Blank lines ahead of the header still count towards row numbers
    offset = text[:len(text) - len(body)].count("\n")
    
    try:
        reader = csv.DictReader(io.StringIO(body), skipinitialspace=True)
        header = [name.strip() for name in (reader.fieldnames or [])]
        reader.fieldnames = header
        rows = [(reader.line_num + offset, row) for row in reader if not _is_blank(row)]
    except csv.Error as e:
        raise CredentialsFormatError(f"Credentials table is not valid CSV: {str(e)}")
    
    account_columns = _resolve_columns(header, ACCOUNT_ID_ALIASES)
    key_columns = _resolve_columns(header, API_KEY_ALIASES)
    if not account_columns and not key_columns:
        raise CredentialsFormatError(
            "Credentials table has no account id or API key column. "
            f"Expected one of {', '.join(ACCOUNT_ID_ALIASES)} and one of {', '.join(API_KEY_ALIASES)}"
        )
    
    records = []
    for row_number, row in rows:
        account_id = _first_value(row, account_columns)
        api_key = _first_value(row, key_columns)
        
        if not account_id or not api_key:
            logger.warning(
                f"Skipping row {row_number} with missing AccountID or ApiKey",
                extra={'context': {'row': row_number, 'account_id': account_id or None}}
            )
            continue
        
        records.append(CredentialRecord(account_id=account_id, api_key=api_key))
    
    logger.info(f"Parsed {len(records)} account credentials")
    return records
