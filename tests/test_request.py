"""
Unit tests for request parsing
"""

import base64
import json

import pytest

from lama_comparator.config import ComparatorConfig
from lama_comparator.errors import ValidationError
from lama_comparator.request import extract_params, get_method, parse_request


class TestGetMethod:
    """Tests for HTTP method detection across payload formats."""

    def test_rest_api_payload(self):
        assert get_method({"httpMethod": "post"}) == "POST"

    def test_http_api_payload(self):
        event = {"requestContext": {"http": {"method": "OPTIONS"}}}
        assert get_method(event) == "OPTIONS"

    def test_defaults_to_get(self):
        assert get_method({}) == "GET"


class TestExtractParams:
    """Query string and body are merged, body first."""

    def test_query_only(self):
        event = {"queryStringParameters": {"mode": "index"}}
        assert extract_params(event) == {"mode": "index"}

    def test_body_overrides_query(self):
        event = {
            "queryStringParameters": {"mode": "index", "asinA": "A1"},
            "body": json.dumps({"mode": "metrics", "asinB": "B1"}),
        }

        assert extract_params(event) == {"mode": "metrics", "asinA": "A1", "asinB": "B1"}

    def test_base64_body(self):
        raw = json.dumps({"mode": "narrative"}).encode("utf-8")
        event = {"body": base64.b64encode(raw).decode("ascii"), "isBase64Encoded": True}

        assert extract_params(event) == {"mode": "narrative"}

    def test_null_query_string(self):
        assert extract_params({"queryStringParameters": None, "body": None}) == {}

    def test_invalid_json(self):
        with pytest.raises(ValidationError) as exc:
            extract_params({"body": "{oops"})
        assert exc.value.status_code == 400

    def test_body_must_be_object(self):
        with pytest.raises(ValidationError):
            extract_params({"body": json.dumps(["metrics"])})


class TestParseRequest:
    """Tests for building a ComparisonRequest."""

    def test_full_request(self):
        event = {"body": json.dumps({
            "mode": " Metrics ",
            "asinA": " B0AAAAAAA1 ",
            "asinB": "B0BBBBBBB2",
            "lang": "en",
        })}

        req = parse_request(event, ComparatorConfig())

        assert req.mode == "metrics"
        assert req.asin_a == "B0AAAAAAA1"
        assert req.asin_b == "B0BBBBBBB2"
        assert req.lang == "EN"

    def test_default_mode_and_lang(self):
        req = parse_request({}, ComparatorConfig())

        assert req.mode == "index"
        assert req.lang == "ES"
        assert req.asin_a is None
        assert req.asin_b is None

    def test_missing_mode_without_default(self):
        with pytest.raises(ValidationError) as exc:
            parse_request({}, ComparatorConfig(default_mode=""))
        assert "mode" in str(exc.value)

    def test_blank_identifiers_become_none(self):
        event = {"queryStringParameters": {"mode": "metrics", "asinA": "  ", "asinB": ""}}

        req = parse_request(event, ComparatorConfig())

        assert req.asin_a is None
        assert req.asin_b is None

    @pytest.mark.parametrize("lang", ["e", "../etc", "ES_1", "toolongx"])
    def test_invalid_lang(self, lang):
        event = {"queryStringParameters": {"mode": "narrative", "lang": lang}}

        with pytest.raises(ValidationError):
            parse_request(event, ComparatorConfig())

    def test_lang_not_checked_outside_narrative(self):
        event = {"queryStringParameters": {"mode": "index", "lang": "x1"}}

        req = parse_request(event, ComparatorConfig())

        assert req.mode == "index"
