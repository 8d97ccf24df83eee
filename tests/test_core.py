import asyncio
import json
import re
from datetime import datetime

import pytest
import pytz
from starlette.requests import Request

from resale_catalog.core.dates import export_timestamp, jst_day_bounds
from resale_catalog.core.exceptions import ValidationException, global_exception_handler
from resale_catalog.infrastructure.storage import FileStorage


def test_jst_day_bounds_are_utc():
    start, end = jst_day_bounds("2024-03-10")

    assert start == pytz.utc.localize(datetime(2024, 3, 9, 15, 0))
    assert end == pytz.utc.localize(datetime(2024, 3, 10, 15, 0))


@pytest.mark.parametrize("value", ["2024/03/10", "10-03-2024", "", "2024-13-01"])
def test_jst_day_bounds_rejects_malformed(value):
    with pytest.raises(ValidationException):
        jst_day_bounds(value)


def test_export_timestamp_format():
    stamp = export_timestamp(pytz.utc.localize(datetime(2025, 12, 12, 11, 15, 39)))
    assert stamp == "2025-12-12T20-15-39JST"
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}-\d{2}-\d{2}JST", export_timestamp())


def test_naive_values_are_taken_as_utc():
    assert export_timestamp(datetime(2024, 1, 1, 16, 0, 0)) == "2024-01-02T01-00-00JST"


def test_unhandled_error_echoes_message():
    request = Request({"type": "http", "method": "GET", "path": "/api/boom", "headers": [], "query_string": b""})

    response = asyncio.run(global_exception_handler(request, RuntimeError("disk on fire")))

    assert response.status_code == 500
    body = json.loads(response.body)
    assert body["error"]["code"] == "InternalServerError"
    assert body["error"]["details"] == {"error": "disk on fire"}
    assert body["error"]["path"] == "/api/boom"


def test_storage_save_overwrites_and_uses_basename(tmp_path):
    storage = FileStorage(str(tmp_path / "images"))

    storage.save("nested/dir/P1_a.jpg", b"one")
    storage.save("P1_a.jpg", b"two")

    assert storage.read("P1_a.jpg") == b"two"
    assert (tmp_path / "images" / "P1_a.jpg").exists()

    cleanup = storage.remove_many(["P1_a.jpg", "never_there.jpg"])
    assert cleanup.ok
    assert cleanup.removed == ["P1_a.jpg", "never_there.jpg"]
