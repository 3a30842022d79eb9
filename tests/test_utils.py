import re
from datetime import date, datetime

from claimdesk.core.utils import (
    days_in_month,
    decode_document,
    decode_photo_url,
    encode_document,
    end_of_day,
    new_prefixed_id,
    resolve_date_window,
)


def test_photo_decoded_from_json_object():
    assert decode_photo_url('{"url":"https://x/y.png"}') == "https://x/y.png"


def test_photo_decoded_from_bare_url():
    assert decode_photo_url("https://x/y.png") == "https://x/y.png"


def test_garbage_photo_is_absent():
    assert decode_photo_url("garbage") is None
    assert decode_photo_url("") is None
    assert decode_photo_url(None) is None


def test_json_without_url_is_absent():
    assert decode_photo_url('{"name": "scan.pdf"}') is None
    assert decode_photo_url("42") is None


def test_document_keeps_name_or_defaults():
    assert decode_document('{"url": "https://x/a.pdf", "name": "Aadhaar"}') == {
        "url": "https://x/a.pdf", "name": "Aadhaar",
    }
    assert decode_document("https://x/a.pdf")["name"] == "View Document"


def test_encode_document_reads_back():
    assert decode_photo_url(encode_document("https://x/y.png", "photo.png")) == "https://x/y.png"
    assert encode_document(None) is None


def test_prefixed_ids():
    assert re.fullmatch(r"comp-\d{13}", new_prefixed_id("comp"))


def test_end_of_day():
    assert end_of_day(date(2024, 1, 20)) == datetime(2024, 1, 20, 23, 59, 59, 999000)


def test_window_requires_from():
    assert resolve_date_window(None, date(2024, 1, 20)) is None


def test_window_covers_whole_to_day():
    start, end = resolve_date_window(date(2024, 1, 10), date(2024, 1, 20))
    assert start == datetime(2024, 1, 10)
    assert end == datetime(2024, 1, 20, 23, 59, 59, 999000)


def test_window_defaults_to_today():
    now = datetime(2024, 5, 5, 8, 30)
    _, end = resolve_date_window(date(2024, 5, 1), None, now=now)
    assert end == datetime(2024, 5, 5, 23, 59, 59, 999000)


def test_days_in_month():
    assert days_in_month(2, 2024) == 29
    assert days_in_month(2, 2023) == 28
    assert days_in_month(4, 2024) == 30
