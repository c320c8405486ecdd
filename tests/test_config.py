"""Tests for scraper input loading and validation."""

import json
import logging
from urllib.parse import parse_qs, urlparse

import pytest

from yelp_scraper.config import ConfigError, ScraperInput, build_search_url, load_input


def test_defaults():
    config = ScraperInput(search_query="tacos", location="Austin, TX")

    assert config.max_results == 50
    assert config.include_reviews is True
    assert config.max_reviews_per_business == 5
    assert config.delay_seconds == 2.0
    assert config.max_retries == 3
    assert config.max_concurrency == 2
    assert config.max_requests_per_crawl == 100


@pytest.mark.parametrize("query,location", [("", "Austin"), ("tacos", ""), ("   ", "Austin")])
def test_query_and_location_are_required(query, location):
    with pytest.raises(ConfigError, match="Both searchQuery and location are required!"):
        ScraperInput(search_query=query, location=location)


def test_negative_and_zero_limits_are_rejected():
    with pytest.raises(ConfigError):
        ScraperInput(search_query="a", location="b", max_results=-1)
    with pytest.raises(ConfigError):
        ScraperInput(search_query="a", location="b", max_concurrency=0)
    with pytest.raises(ConfigError):
        ScraperInput(search_query="a", location="b", max_retries=0)


def test_from_dict_maps_camel_case_keys(caplog):
    with caplog.at_level(logging.WARNING):
        config = ScraperInput.from_dict({
            "searchQuery": " sushi ",
            "location": "Seattle, WA",
            "maxResults": 12,
            "includeReviews": False,
            "delayBetweenRequests": 500,
            "maxReviewsPerBusiness": None,
            "somethingElse": 1,
        })

    assert config.search_query == "sushi"
    assert config.max_results == 12
    assert config.include_reviews is False
    assert config.delay_seconds == 0.5
    assert config.max_reviews_per_business == 5
    assert "Ignoring unknown input field: somethingElse" in caplog.text


def test_load_input_reads_json_object(tmp_path):
    path = tmp_path / "INPUT.json"
    path.write_text(json.dumps({"searchQuery": "pho", "location": "Houston"}))

    assert load_input(path) == {"searchQuery": "pho", "location": "Houston"}


def test_load_input_errors(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_input(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(ConfigError, match="not valid JSON"):
        load_input(broken)

    listing = tmp_path / "list.json"
    listing.write_text("[1, 2]")
    with pytest.raises(ConfigError, match="JSON object"):
        load_input(listing)


def test_build_search_url_encodes_parameters():
    url = build_search_url("pizza & pasta", "San Francisco, CA", 0)
    parsed = urlparse(url)

    assert url.startswith("https://www.yelp.com/search?")
    assert parse_qs(parsed.query) == {
        "find_desc": ["pizza & pasta"],
        "find_loc": ["San Francisco, CA"],
        "start": ["0"],
    }


@pytest.mark.parametrize("field,value", [
    ("maxResults", "5"),
    ("maxRetries", 2.5),
    ("delayBetweenRequests", True),
    ("includeReviews", "yes"),
    ("proxyUrls", "http://10.0.0.1:8000"),
    ("location", 94103),
])
def test_wrongly_typed_input_is_a_config_error(field, value):
    data = {"searchQuery": "pizza", "location": "San Francisco, CA", field: value}

    with pytest.raises(ConfigError, match="must be"):
        ScraperInput.from_dict(data)
