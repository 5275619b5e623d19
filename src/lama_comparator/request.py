"""
Request Parsing
---------------
Normalises API Gateway / Netlify events into a ComparisonRequest.
Parameters may arrive in the query string, the JSON body, or both;
body values take precedence.
"""

import base64
import binascii
import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .config import ComparatorConfig, Mode, VALID_MODES
from .errors import ValidationError

_LANG_RE = re.compile(r"^[A-Za-z]{2,5}$")


@dataclass
class ComparisonRequest:
    """Parsed comparator request."""
    mode: str
    asin_a: Optional[str] = None
    asin_b: Optional[str] = None
    lang: Optional[str] = None


def get_method(event: dict) -> str:
    method = event.get("httpMethod")
    if not method:
        # HTTP API (payload v2)
        method = ((event.get("requestContext") or {}).get("http") or {}).get("method")
    return (method or "GET").upper()


def _parse_body(event: dict) -> Dict[str, Any]:
    raw = event.get("body")
    if not raw:
        return {}

    if event.get("isBase64Encoded"):
        try:
            raw = base64.b64decode(raw).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            raise ValidationError("Invalid base64 request body.")

    try:
        body = json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError("Invalid JSON body.")

    if not isinstance(body, dict):
        raise ValidationError("JSON body must be an object.")
    return body


def extract_params(event: dict) -> Dict[str, Any]:
    """Merge query string parameters and JSON body (body wins)."""
    params = dict(event.get("queryStringParameters") or {})
    params.update(_parse_body(event))
    return params


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def parse_request(event: dict, cfg: ComparatorConfig) -> ComparisonRequest:
    """
    Build a ComparisonRequest from an inbound event.

    Only mode, and lang for narrative requests, are validated here;
    identifier requirements depend on the mode and are checked by the
    dispatcher.
    """
    params = extract_params(event)

    mode = (_clean(params.get("mode")) or cfg.default_mode or "").lower()
    if not mode:
        raise ValidationError(f"Missing field: mode ({', '.join(VALID_MODES)}).")

    lang = _clean(params.get("lang")) or cfg.default_lang
    if mode == Mode.NARRATIVE.value and not _LANG_RE.match(lang):
        raise ValidationError(f"Invalid lang: {lang}")

    return ComparisonRequest(
        mode=mode,
        asin_a=_clean(params.get("asinA")),
        asin_b=_clean(params.get("asinB")),
        lang=lang.upper(),
    )
