# tests/unit/test_validation.py
# ------------------------------------------------------------
# Purpose: Field presence check of exported dashboards. The
#          check only reports; it never raises.
# ------------------------------------------------------------

import logging

from dashboard_backup.services.validation import validate_dashboard_structure


def _complete_record():
    return {
        "name": "D",
        "description": "",
        "permissions": "PUBLIC_READ_WRITE",
        "pages": [
            {
                "name": "P",
                "guid": "G",
                "description": "",
                "widgets": [
                    {
                        "visualization": {},
                        "title": "",
                        "layout": {},
                        "rawConfiguration": {},
                        "id": "",
                        "linkedEntityGuids": [],
                    }
                ],
            }
        ],
    }


def test_complete_record_passes(caplog):
    with caplog.at_level(logging.INFO):
        assert validate_dashboard_structure(_complete_record(), "out/1_D.json") == []
    assert "Structure validated for out/1_D.json" in caplog.text


def test_missing_fields_are_reported_with_paths(caplog):
    record = _complete_record()
    del record["permissions"]
    del record["pages"][0]["guid"]
    del record["pages"][0]["widgets"][0]["linkedEntityGuids"]

    with caplog.at_level(logging.WARNING):
        missing = validate_dashboard_structure(record, "label")

    assert missing == [
        "permissions",
        "pages[0].guid",
        "pages[0].widgets[0].linkedEntityGuids",
    ]
    assert "Missing fields in label" in caplog.text


def test_non_list_pages_and_widgets_are_not_descended():
    record = _complete_record()
    record["pages"][0]["widgets"] = None
    assert validate_dashboard_structure(record, "x") == []

    record["pages"] = "not a list"
    assert validate_dashboard_structure(record, "x") == []


def test_malformed_entries_never_raise():
    record = {"name": "D", "pages": [None, {"widgets": [42]}]}
    missing = validate_dashboard_structure(record, "x")

    assert "description" in missing
    assert "pages[0].name" in missing
    assert "pages[1].widgets[0].id" in missing
