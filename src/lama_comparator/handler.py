"""
Lama Comparator Lambda Handler
------------------------------
Single endpoint for the comparator front end:
- mode=index: public listing of the catalog
- mode=metrics: both Lama records plus an AI comparison of the numbers
- mode=narrative: AI comparison written from the long-form blog reviews

Every response is JSON with a "success" flag and carries CORS headers.
"""

import json
from typing import Any, Callable, Dict, Optional, Tuple

from .catalog import ComparatorContext, lite_record
from .config import BLOG_FILENAME_PATTERN, ComparatorConfig, Mode, VALID_MODES, config
from .errors import (
    ComparatorError,
    MethodNotAllowedError,
    NotFoundError,
    UpstreamServiceError,
    ValidationError,
)
from .llm import CompletionRouter
from .prompts import build_metrics_prompt, build_narrative_prompt
from .request import ComparisonRequest, get_method, parse_request
from .utils.logger import get_logger

logger = get_logger(__name__)

# CORS headers for every response
CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

ALLOWED_METHODS = ("GET", "POST")

Completion = Callable[[str], str]
Product = Dict[str, Any]


def _response(status_code: int, body: dict) -> dict:
    """Build API Gateway response."""
    return {
        "statusCode": status_code,
        "headers": dict(CORS_HEADERS),
        "body": json.dumps(body, ensure_ascii=False),
    }


def _error_response(status_code: int, message: str) -> dict:
    return _response(status_code, {"success": False, "error": message})


def _preflight_response() -> dict:
    return {
        "statusCode": 204,
        "headers": dict(CORS_HEADERS),
        "body": "",
    }


# =============================================================================
# MODE HANDLERS
# =============================================================================

def handle_index(ctx: ComparatorContext) -> dict:
    """List every catalog record, projected unless full records are configured."""
    catalog = ctx.catalog
    if ctx.config.index_full_records:
        products = list(catalog)
    else:
        products = [lite_record(record) for record in catalog]

    return {"success": True, "count": len(products), "products": products}


def _resolve_pair(req: ComparisonRequest, ctx: ComparatorContext) -> Tuple[Product, Product]:
    """Validate both identifiers and look them up in the catalog."""
    missing_fields = [
        name for name, value in (("asinA", req.asin_a), ("asinB", req.asin_b)) if not value
    ]
    if missing_fields:
        raise ValidationError(f"Missing fields: {', '.join(missing_fields)}.")

    if ctx.config.reject_identical_asins and req.asin_a.lower() == req.asin_b.lower():
        raise ValidationError("asinA and asinB must be different products.")

    product_a = ctx.find_product(req.asin_a)
    product_b = ctx.find_product(req.asin_b)

    missing = [
        asin for asin, product in ((req.asin_a, product_a), (req.asin_b, product_b))
        if product is None
    ]
    if missing:
        raise NotFoundError(
            f"ASIN not found in {ctx.config.index_file}: {', '.join(missing)}",
            missing=missing,
        )

    return product_a, product_b


def handle_metrics(
    req: ComparisonRequest,
    ctx: ComparatorContext,
    completion: Completion,
) -> dict:
    """
    Return both full records and, when enabled, an AI comparison.

    An upstream failure yields analysis=None when degradation is enabled,
    otherwise it propagates as a 500.
    """
    product_a, product_b = _resolve_pair(req, ctx)
    body = {"success": True, "products": [product_a, product_b], "analysis": None}

    if not ctx.config.metrics_analysis_enabled:
        return body

    prompt = build_metrics_prompt(product_a, product_b)
    try:
        body["analysis"] = completion(prompt)
    except UpstreamServiceError as e:
        if not ctx.config.metrics_degrade_on_llm_error:
            raise
        logger.warning(f"Metrics analysis unavailable, returning records only: {e}")

    return body


def handle_narrative(
    req: ComparisonRequest,
    ctx: ComparatorContext,
    completion: Completion,
) -> dict:
    """Build a persuasive comparison from both blog texts."""
    product_a, product_b = _resolve_pair(req, ctx)

    texts = {}
    missing = []
    for product in (product_a, product_b):
        asin = str(product.get("asin"))
        try:
            texts[asin] = ctx.read_review_text(asin, req.lang)
        except NotFoundError:
            missing.append(asin)

    if missing:
        pattern = BLOG_FILENAME_PATTERN.format(asin="{ASIN}", lang=req.lang)
        raise NotFoundError(
            f"Blog text not found for ASIN {', '.join(missing)} (expected {pattern})",
            missing=missing,
        )

    prompt = build_narrative_prompt(
        product_a,
        product_b,
        texts[str(product_a.get("asin"))],
        texts[str(product_b.get("asin"))],
    )
    text = completion(prompt)

    return {
        "success": True,
        "text": text,
        "lang": req.lang,
        "products": [lite_record(product_a), lite_record(product_b)],
    }


# =============================================================================
# DISPATCH
# =============================================================================

def dispatch(event: dict, ctx: ComparatorContext, completion: Completion) -> dict:
    """
    Route one inbound event to the matching mode handler.

    Never raises: every failure is turned into a JSON error response.
    """
    try:
        method = get_method(event)
        if method == "OPTIONS":
            return _preflight_response()

        if method not in ALLOWED_METHODS:
            raise MethodNotAllowedError(f"Method {method} not allowed. Use GET or POST.")

        req = parse_request(event, ctx.config)
        logger.info(
            f"Comparator request: method={method}, mode={req.mode}, "
            f"asinA={req.asin_a}, asinB={req.asin_b}, lang={req.lang}"
        )

        if req.mode == Mode.INDEX.value:
            body = handle_index(ctx)
        elif req.mode == Mode.METRICS.value:
            body = handle_metrics(req, ctx, completion)
        elif req.mode == Mode.NARRATIVE.value:
            body = handle_narrative(req, ctx, completion)
        else:
            raise ValidationError(
                f"Unknown mode '{req.mode}'. mode must be one of: {', '.join(VALID_MODES)}."
            )

        return _response(200, body)

    except ComparatorError as e:
        if e.status_code >= 500:
            logger.error(f"Comparator error ({e.status_code}): {e.message}")
        else:
            logger.warning(f"Comparator request rejected ({e.status_code}): {e.message}")
        return _error_response(e.status_code, e.message)

    except Exception as e:
        logger.exception("Unhandled error in comparator")
        return _error_response(500, f"Internal error: {e}")


# =============================================================================
# LAMBDA ENTRY POINT
# =============================================================================

# Lazy initialization, reused across warm invocations
_context: Optional[ComparatorContext] = None
_router: Optional[CompletionRouter] = None


def _get_runtime(cfg: ComparatorConfig = config) -> Tuple[ComparatorContext, CompletionRouter]:
    global _context, _router
    if _context is None:
        _context = ComparatorContext(cfg)
    if _router is None:
        _router = CompletionRouter(cfg)
    return _context, _router


def lambda_handler(event, context):
    try:
        ctx, router = _get_runtime()
    except Exception as e:
        logger.exception("Failed to initialise comparator")
        return _error_response(500, f"Internal error: {e}")

    return dispatch(event or {}, ctx, router.generate)


# Netlify-style entry point name
handler = lambda_handler
