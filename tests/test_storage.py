"""Tests for the dataset sink and the result emitter."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

import pytest

from yelp_scraper.emitter import ResultEmitter
from yelp_scraper.models import BusinessDetail, OutputRecord, Review
from yelp_scraper.storage import ContentType, DatasetStorage


def make_detail(**overrides):
    fields = dict(
        url="https://www.yelp.com/biz/joes-pizza",
        business_name="Joe's Pizza",
        rating=4.5,
        review_count=120,
        categories=["Pizza"],
        price_range="$",
        address="7 Carmine St, New York, NY 10014",
        phone="(212) 366-1182",
        hours=["Mon10:00 AM - 4:00 AM"],
        photos=["https://s3-media0.fl.yelpcdn.com/bphoto/a/o.jpg"],
    )
    fields.update(overrides)
    return BusinessDetail(**fields)


def test_record_serializes_in_dataset_schema():
    stamp = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
    review = Review(text="Classic New York slice, worth the line.", author="Ana", rating=5.0, date="4/2/2024")

    data = OutputRecord.create(make_detail(), [review], scraped_at=stamp).to_dict()

    assert list(data) == [
        "businessName", "rating", "reviewCount", "categories", "priceRange", "address",
        "phone", "hours", "photos", "reviews", "url", "scrapedAt",
    ]
    assert data["reviews"] == [{
        "author": "Ana", "rating": 5.0, "text": "Classic New York slice, worth the line.", "date": "4/2/2024"
    }]
    assert data["scrapedAt"] == "2024-05-01T12:30:00+00:00"


def test_empty_review_list_serializes_as_null():
    record = OutputRecord.create(make_detail(), [])

    assert record.reviews is None
    assert record.to_dict()["reviews"] is None
    assert record.scraped_at.endswith("+00:00")


def test_photos_are_capped_on_the_model():
    detail = make_detail(photos=[f"https://x/bphoto/{i}.jpg" for i in range(12)])

    assert len(detail.photos) == 10


@pytest.mark.asyncio
async def test_push_data_appends_json_lines(tmp_path):
    storage = DatasetStorage(tmp_path / "out")

    assert await storage.push_data(OutputRecord.create(make_detail()))
    assert await storage.push_data({"businessName": "Plain dict"})

    lines = (tmp_path / "out" / "dataset.jsonl").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert json.loads(lines[0])["businessName"] == "Joe's Pizza"
    assert storage.item_count == 2
    assert [item["businessName"] for item in storage.read_items()] == ["Joe's Pizza", "Plain dict"]


@pytest.mark.asyncio
async def test_new_storage_starts_with_empty_dataset(tmp_path):
    first = DatasetStorage(tmp_path)
    await first.push_data({"businessName": "A"})

    second = DatasetStorage(tmp_path)

    assert second.get_info()["item_count"] == 0
    assert second.read_items() == []


@pytest.mark.asyncio
async def test_existing_dataset_is_kept_and_counted_without_purge(tmp_path):
    first = DatasetStorage(tmp_path)
    await first.push_data({"businessName": "A"})

    second = DatasetStorage(tmp_path, purge_on_start=False)
    await second.push_data({"businessName": "B"})

    assert second.get_info()["item_count"] == 2
    assert [item["businessName"] for item in second.read_items()] == ["A", "B"]


@pytest.mark.asyncio
async def test_unserializable_record_is_logged_not_raised(tmp_path, caplog):
    storage = DatasetStorage(tmp_path)

    with caplog.at_level(logging.ERROR):
        assert not await storage.push_data({"bad": object()})

    assert storage.item_count == 0
    assert "Error pushing record to dataset" in caplog.text


@pytest.mark.asyncio
async def test_set_value_writes_key_value_entry(tmp_path):
    storage = DatasetStorage(tmp_path)

    path = await storage.set_value("DEBUG_SEARCH_HTML", "<html></html>", ContentType.HTML)

    assert path.endswith("key_value_store/DEBUG_SEARCH_HTML.html")
    assert (tmp_path / "key_value_store" / "DEBUG_SEARCH_HTML.html").read_text() == "<html></html>"

    json_path = await storage.set_value("STATS", {"pages": 3})
    assert json.loads(Path(json_path).read_text()) == {"pages": 3}


@pytest.mark.asyncio
async def test_emitter_counts_persisted_records(tmp_path, caplog):
    emitter = ResultEmitter(DatasetStorage(tmp_path))
    review = Review(text="Great crust and friendly staff all round.")

    with caplog.at_level(logging.INFO):
        record = await emitter.emit(make_detail(), [review])

    assert emitter.emitted_count == 1
    assert record.reviews == (review,)
    assert "Saved: Joe's Pizza" in caplog.text
    assert emitter.storage.read_items()[0]["reviews"][0]["author"] == "Anonymous"
