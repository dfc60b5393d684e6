from datetime import date

from task_validation import parse_iso_date, validate_task


def _paths(errors):
    return [e["path"] for e in errors]


def test_minimal_body_is_valid():
    data, errors = validate_task({"title": "Buy milk"})
    assert errors == []
    assert data == {"title": "Buy milk", "description": None, "due_date": None, "status": None}


def test_full_body_is_cleaned():
    data, errors = validate_task({
        "title": "Report",
        "description": "quarterly",
        "due_date": "2026-10-19T23:30:00-05:00",
        "status": "in-progress",
    })
    assert errors == []
    assert data["due_date"] == date(2026, 10, 19)
    assert data["status"] == "in-progress"


def test_missing_or_blank_title():
    _, errors = validate_task({"title": "   "})
    assert errors == [{
        "type": "field",
        "location": "body",
        "path": "title",
        "value": "   ",
        "msg": "Title is required",
    }]

    _, errors = validate_task({})
    assert _paths(errors) == ["title"]


def test_empty_optional_fields_count_as_absent():
    data, errors = validate_task({"title": "x", "description": "", "due_date": "", "status": ""})
    assert errors == []
    assert data["description"] is None
    assert data["due_date"] is None
    assert data["status"] is None


def test_every_bad_field_is_reported():
    _, errors = validate_task({
        "title": "",
        "description": 42,
        "due_date": "next tuesday",
        "status": "archived",
    })
    assert _paths(errors) == ["title", "description", "due_date", "status"]
    assert errors[-1]["msg"] == "Invalid status"


def test_body_must_be_an_object():
    data, errors = validate_task(["title"])
    assert data is None
    assert len(errors) == 1

    _, errors = validate_task(None)
    assert len(errors) == 1


def test_parse_iso_date():
    assert parse_iso_date("2026-10-19") == date(2026, 10, 19)
    assert parse_iso_date("2026-10-19T10:00:00.000Z") == date(2026, 10, 19)
    assert parse_iso_date("2026-13-01") is None
    assert parse_iso_date("19/10/2026") is None
    assert parse_iso_date(20261019) is None


def test_numeric_title_is_kept_as_text():
    data, errors = validate_task({"title": 5})
    assert errors == []
    assert data["title"] == "5"


def test_non_scalar_title_is_rejected():
    _, errors = validate_task({"title": ["a"]})
    assert errors[0]["msg"] == "Title must be a string"

    _, errors = validate_task({"title": True})
    assert errors[0]["msg"] == "Title must be a string"
