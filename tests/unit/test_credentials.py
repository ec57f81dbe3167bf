# tests/unit/test_credentials.py
# ------------------------------------------------------------
# Purpose: Parsing of the decrypted credentials table: column
#          aliases, row skipping and fatal format errors.
# ------------------------------------------------------------

import logging

import pytest

from dashboard_backup.models.exceptions import CredentialsFormatError
from dashboard_backup.services.credentials import parse_credentials


def test_parse_uses_first_matching_alias():
    text = "accountNumber,AccountID,apiKey\n111,222,KEY-1\n"
    records = parse_credentials(text)
    assert [(r.account_id, r.api_key) for r in records] == [("111", "KEY-1")]


def test_parse_matches_headers_case_insensitively_and_trims():
    text = " ACCOUNTID , Api_Key \n 42 , KEY-42 \n\n 43,KEY-43\n"
    records = parse_credentials(text)
    assert [(r.account_id, r.api_key) for r in records] == [("42", "KEY-42"), ("43", "KEY-43")]


def test_parse_falls_back_to_next_alias_when_first_is_empty():
    text = "accountNumber,accountId,ApiKey\n,777,KEY\n"
    assert parse_credentials(text)[0].account_id == "777"


def test_rows_missing_a_value_are_skipped_with_warning(caplog):
    text = "accountId,apiKey\n1,KEY-1\n2,\n,KEY-3\n4,KEY-4\n"
    with caplog.at_level(logging.WARNING):
        records = parse_credentials(text)

    assert [r.account_id for r in records] == ["1", "4"]
    assert "Skipping row 3" in caplog.text
    assert "Skipping row 4" in caplog.text
    # The API key of a skipped row must never reach the logs.
    assert "KEY-3" not in caplog.text


def test_table_without_api_key_column_yields_no_records():
    records = parse_credentials("accountId,region\n1,US\n2,EU\n")
    assert records == []


def test_table_without_any_known_column_is_rejected():
    with pytest.raises(CredentialsFormatError):
        parse_credentials("foo,bar\n1,2\n")


def test_empty_table_is_rejected():
    with pytest.raises(CredentialsFormatError):
        parse_credentials("\n  \n")


def test_api_key_is_hidden_from_repr():
    record = parse_credentials("accountId,apiKey\n1,SECRET\n")[0]
    assert "SECRET" not in repr(record)


def test_quoted_field_may_span_blank_lines():
    text = 'accountId,apiKey,note\n1,KEY-1,"first line\n\nsecond line"\n2,KEY-2,\n'
    records = parse_credentials(text)
    assert [(r.account_id, r.api_key) for r in records] == [("1", "KEY-1"), ("2", "KEY-2")]


def test_skipped_row_numbers_count_blank_lines(caplog):
    text = '\naccountId,apiKey,note\n1,KEY-1,"a\n\nb"\n\n   \n,KEY-7\n'
    with caplog.at_level(logging.WARNING):
        records = parse_credentials(text)

    assert [r.account_id for r in records] == ["1"]
    assert "Skipping row 8" in caplog.text
    assert caplog.text.count("Skipping row") == 1
