from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from lunarcal.api.app import app
from lunarcal.api.public import convert, convert_anniversary
from lunarcal.core.reference import load_reference_table


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_convert_endpoint(client):
    res = client.get("/api/v1/convert", params={"title": "설날", "month": 1, "day": 1, "today": "2025-01-01"})
    assert res.status_code == 200
    body = res.json()

    assert body["event_label"] == "설날 (음력 1월 1일)"
    assert body["count"] == 26
    first = body["occurrences"][0]
    assert first == {
        "year": 2025,
        "solar_date": "2025-01-29",
        "date_label": "2025년 1월 29일",
        "weekday": 3,
        "weekday_label": "수요일",
        "countdown": "D-28",
        "method": None,
        "reference_solar_date": None,
    }


def test_convert_endpoint_debug_reports_method(client):
    res = client.get(
        "/api/v1/convert",
        params={"title": "추석", "month": 8, "day": 15, "today": "2025-01-01", "debug": "true"},
    )
    assert res.status_code == 200
    rows = {r["year"]: r for r in res.json()["occurrences"]}
    assert rows[2025]["method"] == "exact"
    assert rows[2035]["method"] == "approx"
    assert rows[2035]["reference_solar_date"] == "2030-09-12"


def test_convert_endpoint_no_data(client):
    res = client.get("/api/v1/convert", params={"title": "x", "month": 2, "day": 30, "today": "2025-01-01"})
    assert res.status_code == 404


@pytest.mark.parametrize(
    "params",
    [
        {"title": "x", "month": 13, "day": 1, "today": "2025-01-01"},
        {"title": "x", "month": 1, "day": 31, "today": "2025-01-01"},
        {"title": "x", "month": 1, "day": 1, "today": "2025/01/01"},
        {"title": "   ", "month": 1, "day": 1, "today": "2025-01-01"},
        {"title": "x", "month": 1, "day": 1, "tz": "Nowhere/Nothing"},
    ],
)
def test_convert_endpoint_rejects_bad_input(client, params):
    assert client.get("/api/v1/convert", params=params).status_code == 422


def test_convert_endpoint_defaults_today(client):
    res = client.get("/api/v1/convert", params={"title": "설날", "month": 1, "day": 1, "tz": "Asia/Seoul"})
    assert res.status_code in (200, 404)


def test_convert_csv_endpoint(client):
    res = client.get("/api/v1/convert.csv", params={"title": "설날", "month": 1, "day": 1, "today": "2025-06-01"})
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/csv")
    assert "filename*=UTF-8''" in res.headers["content-disposition"]
    assert res.content.startswith(b"\xef\xbb\xbf")

    lines = res.content.decode("utf-8")[1:].split("\n")
    assert lines[0] == "Subject,Start Date,All Day Event"
    assert lines[1] == "설날,2026-02-17,TRUE"
    assert len(lines) == 1 + 25


def test_convert_csv_endpoint_no_data(client):
    res = client.get("/api/v1/convert.csv", params={"title": "x", "month": 1, "day": 1, "today": "2100-01-01"})
    assert res.status_code == 404


def test_reference_endpoint(client):
    body = client.get("/api/v1/reference").json()
    assert body["entries"] == 66
    assert body["solar_year_min"] == 2020
    assert body["solar_year_max"] == 2050
    assert body["lunar_month_days"] == 6


def test_convert_anniversary_function():
    res = convert_anniversary("설날", 1, 1, today="2050-01-23")
    assert res["count"] == 1
    assert res["occurrences"][0]["countdown"] == "D-DAY"

    res = convert_anniversary("설날", 1, 1, today=date(2050, 1, 24))
    assert res["count"] == 0
    assert res["occurrences"] == []


def test_convert_with_empty_injected_table_is_no_data():
    table = load_reference_table("garbage\n")
    assert len(table) == 0

    result = convert("설날", 1, 1, today=date(2025, 1, 1), table=table)
    assert result.is_empty

    res = convert_anniversary("설날", 1, 1, today="2025-01-01", table=table, debug=True)
    assert res["count"] == 0
    assert res["occurrences"] == []
