# tests/unit/test_dashboard_model.py
# ------------------------------------------------------------
# Purpose: Reshaping raw NerdGraph dashboard entities into the
#          UI export layout: defaults, linked entity flattening
#          and JSON round trips.
# ------------------------------------------------------------

import copy
import json

import pytest

from dashboard_backup.models.dashboard import DEFAULT_PERMISSIONS, DashboardRecord, transform
from dashboard_backup.services.validation import find_missing_fields


RAW_ENTITY = {
    "name": "Service Health",
    "description": "Golden signals",
    "permissions": "PUBLIC_READ_ONLY",
    "pages": [
        {
            "name": "Overview",
            "guid": "PAGE-1",
            "description": "",
            "widgets": [
                {
                    "visualization": {"id": "viz.line"},
                    "title": "Throughput",
                    "layout": {"row": 1, "column": 1, "width": 4, "height": 3},
                    "rawConfiguration": {"nrqlQueries": [{"accountId": 1, "query": "SELECT count(*) FROM Transaction"}]},
                    "id": "W-1",
                    "linkedEntities": [{"guid": "L-1"}, {"guid": "L-2"}, {"guid": "L-3"}],
                },
                {"title": "Errors", "id": "W-2", "linkedEntities": None},
            ],
        },
        {"name": "Details", "guid": "PAGE-2", "widgets": []},
    ],
}


def test_full_entity_keeps_values_and_key_order():
    exported = transform(RAW_ENTITY, "fallback").to_dict()

    assert list(exported) == ["name", "description", "permissions", "pages"]
    assert exported["name"] == "Service Health"
    assert exported["permissions"] == "PUBLIC_READ_ONLY"
    assert [p["name"] for p in exported["pages"]] == ["Overview", "Details"]

    widget = exported["pages"][0]["widgets"][0]
    assert list(widget) == ["visualization", "title", "layout", "rawConfiguration", "id", "linkedEntityGuids"]
    assert widget["layout"] == {"row": 1, "column": 1, "width": 4, "height": 3}


def test_linked_entities_are_flattened_to_guids_in_order():
    widget = transform(RAW_ENTITY, "x").to_dict()["pages"][0]["widgets"][0]

    assert widget["linkedEntityGuids"] == ["L-1", "L-2", "L-3"]
    assert "linkedEntities" not in widget


def test_transform_does_not_modify_its_input():
    raw = copy.deepcopy(RAW_ENTITY)
    transform(raw, "x")
    assert raw == RAW_ENTITY


@pytest.mark.parametrize("field,default", [
    ("description", ""),
    ("permissions", DEFAULT_PERMISSIONS),
    ("pages", []),
])
def test_missing_top_level_fields_take_defaults(field, default):
    raw = copy.deepcopy(RAW_ENTITY)
    del raw[field]
    exported = transform(raw, "x").to_dict()

    assert exported[field] == default
    assert field not in find_missing_fields(exported)


def test_missing_name_falls_back_to_listing_name():
    raw = copy.deepcopy(RAW_ENTITY)
    del raw["name"]
    assert transform(raw, "Listed Name").name == "Listed Name"


@pytest.mark.parametrize("field,default", [
    ("visualization", {}),
    ("title", ""),
    ("layout", {}),
    ("rawConfiguration", {}),
    ("id", ""),
    ("linkedEntityGuids", []),
])
def test_missing_widget_fields_take_defaults(field, default):
    raw = {"name": "D", "pages": [{"name": "P", "widgets": [{}]}]}
    exported = transform(raw, "D").to_dict()

    assert exported["pages"][0]["widgets"][0][field] == default
    assert find_missing_fields(exported) == []


def test_missing_page_fields_take_defaults():
    exported = transform({"pages": [{}]}, "D").to_dict()
    assert exported["pages"] == [{"name": "", "guid": "", "description": "", "widgets": []}]


def test_absent_entity_gives_fully_defaulted_record():
    assert transform(None, "Orphan").to_dict() == {
        "name": "Orphan",
        "description": "",
        "permissions": DEFAULT_PERMISSIONS,
        "pages": [],
    }


def test_json_round_trip_preserves_structure():
    record = transform(RAW_ENTITY, "x")
    restored = DashboardRecord.from_dict(json.loads(json.dumps(record.to_dict(), indent=2)))

    assert restored == record
    assert [w.id for w in restored.pages[0].widgets] == ["W-1", "W-2"]
    assert record.widget_count == 2
