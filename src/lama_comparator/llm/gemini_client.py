"""
Gemini Client
-------------
Text completion through the Google Generative Language REST API.
"""

import http.client
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Dict, Optional

from ..config import ComparatorConfig
from ..errors import UpstreamServiceError
from ..utils.secrets import resolve_api_key

# Setup logger (compatible with both local and Lambda)
logger = logging.getLogger(__name__)


def extract_text(data: Dict[str, Any]) -> str:
    """
    Pull the generated text out of a generateContent response.

    Path: candidates[0].content.parts[*].text
    """
    candidates = data.get("candidates") or []
    if not candidates:
        raise UpstreamServiceError("Unexpected Gemini response: no candidates")

    parts = (candidates[0].get("content") or {}).get("parts") or []
    text = "".join(part.get("text") or "" for part in parts if isinstance(part, dict))
    text = text.strip()
    if not text:
        raise UpstreamServiceError("Unexpected Gemini response: empty text")
    return text


class GeminiClient:
    """Thin wrapper around models/{model}:generateContent."""

    def __init__(self, cfg: ComparatorConfig):
        self.config = cfg
        self.model = cfg.gemini_model
        self._api_key: Optional[str] = None

    @property
    def api_key(self) -> str:
        """Lazy resolution of the API key (env var or Secrets Manager)."""
        if self._api_key is None:
            self._api_key = resolve_api_key(
                self.config.gemini_api_key,
                self.config.gemini_secret_name,
                "GEMINI_API_KEY",
                self.config.aws_region,
            )
        return self._api_key

    def _endpoint(self) -> str:
        base = self.config.gemini_api_base.rstrip("/")
        query = urllib.parse.urlencode({"key": self.api_key})
        return f"{base}/models/{self.model}:generateContent?{query}"

    def generate(self, prompt: str) -> str:
        """
        Send a single user prompt and return the generated text.

        Raises:
            ConfigurationError: if no API key is available
            UpstreamServiceError: on HTTP/network failure or empty output
        """
        payload = json.dumps({
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": prompt}],
                }
            ]
        }).encode("utf-8")

        request = urllib.request.Request(
            self._endpoint(),
            data=payload,
            headers={"Content-Type": "application/json"},
            method="POST",
        )

        logger.info(f"Calling Gemini model: {self.model} (prompt {len(prompt)} chars)")

        kwargs = {}
        if self.config.llm_timeout_seconds:
            kwargs["timeout"] = self.config.llm_timeout_seconds

        try:
            with urllib.request.urlopen(request, **kwargs) as response:
                data = json.loads(response.read().decode("utf-8"))
        except urllib.error.HTTPError as e:
            error_body = e.read().decode("utf-8", errors="replace")
            logger.error(f"Gemini API error: {e.code} - {error_body}")
            raise UpstreamServiceError(f"Gemini API error ({e.code}): {error_body}")
        except urllib.error.URLError as e:
            logger.error(f"Gemini network error: {e.reason}")
            raise UpstreamServiceError(f"Gemini network error: {e.reason}")
        except (OSError, http.client.HTTPException) as e:
            # timeouts, resets and truncated bodies while reading the response
            logger.error(f"Gemini connection error: {e!r}")
            raise UpstreamServiceError(f"Gemini connection error: {e}")
        except ValueError as e:
            raise UpstreamServiceError(f"Gemini returned invalid JSON: {e}")

        text = extract_text(data)
        logger.info(f"Gemini completion received: {len(text)} chars")
        return text
