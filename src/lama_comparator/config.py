"""
Comparator Configuration
------------------------
Central configuration for data lookup, LLM routing and mode behaviour.
"""

import os
from enum import Enum
from dataclasses import dataclass
from typing import Optional


class Mode(Enum):
    """Request modes understood by the comparator."""
    INDEX = "index"
    METRICS = "metrics"
    NARRATIVE = "narrative"


class LLMProvider(Enum):
    """Text-completion providers."""
    GEMINI = "gemini"    # Google Generative Language API
    BEDROCK = "bedrock"  # Amazon Bedrock (Anthropic models)


VALID_MODES = tuple(m.value for m in Mode)

# Public subset of a Lama record returned by mode=index
LITE_FIELDS = (
    "asin",
    "nombre_producto",
    "market",
    "categoria_inferida",
    "n_reviews",
    "mean_stars",
    "tags_tematica",
)

BLOG_FILENAME_PATTERN = "{asin}_{lang}_blog.txt"

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_float(name: str) -> Optional[float]:
    value = os.environ.get(name)
    if not value:
        return None
    return float(value)


@dataclass
class ComparatorConfig:
    """Comparator configuration settings."""

    # AWS Settings
    aws_region: str = "eu-west-1"

    # Text-completion service
    llm_provider: str = LLMProvider.GEMINI.value
    gemini_api_key: Optional[str] = None
    gemini_secret_name: Optional[str] = None
    gemini_model: str = "gemini-1.5-flash"
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    bedrock_model_id: str = "anthropic.claude-3-haiku-20240307-v1:0"
    llm_timeout_seconds: Optional[float] = None  # None = wait for the platform timeout

    # Static data
    data_dir: Optional[str] = None
    index_file: str = "lama_index.json"
    lambda_task_root: str = "/var/task"

    # Mode behaviour
    default_mode: str = Mode.INDEX.value  # "" makes mode mandatory
    default_lang: str = "ES"
    metrics_analysis_enabled: bool = True
    metrics_degrade_on_llm_error: bool = True
    index_full_records: bool = False
    reject_identical_asins: bool = True

    @classmethod
    def from_env(cls) -> "ComparatorConfig":
        """Build a configuration from environment variables."""
        return cls(
            aws_region=os.environ.get("AWS_REGION", "eu-west-1"),
            llm_provider=os.environ.get("LLM_PROVIDER", LLMProvider.GEMINI.value).lower(),
            gemini_api_key=os.environ.get("GEMINI_API_KEY") or None,
            gemini_secret_name=os.environ.get("GEMINI_SECRET_NAME") or None,
            gemini_model=os.environ.get("GEMINI_MODEL", "gemini-1.5-flash"),
            gemini_api_base=os.environ.get(
                "GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta"
            ),
            bedrock_model_id=os.environ.get(
                "BEDROCK_MODEL_ID", "anthropic.claude-3-haiku-20240307-v1:0"
            ),
            llm_timeout_seconds=_env_float("LLM_TIMEOUT_SECONDS"),
            data_dir=os.environ.get("LAMA_DATA_DIR") or None,
            index_file=os.environ.get("LAMA_INDEX_FILE", "lama_index.json"),
            lambda_task_root=os.environ.get("LAMBDA_TASK_ROOT", "/var/task"),
            default_mode=os.environ.get("COMPARATOR_DEFAULT_MODE", Mode.INDEX.value).strip().lower(),
            default_lang=os.environ.get("COMPARATOR_DEFAULT_LANG", "ES").strip().upper(),
            metrics_analysis_enabled=_env_bool("METRICS_ANALYSIS_ENABLED", True),
            metrics_degrade_on_llm_error=_env_bool("METRICS_DEGRADE_ON_LLM_ERROR", True),
            index_full_records=_env_bool("INDEX_FULL_RECORDS", False),
            reject_identical_asins=_env_bool("REJECT_IDENTICAL_ASINS", True),
        )


def get_llm_provider(cfg: ComparatorConfig) -> LLMProvider:
    """Get the configured LLM provider, defaulting to Gemini."""
    try:
        return LLMProvider(cfg.llm_provider)
    except ValueError:
        return LLMProvider.GEMINI


# Global config instance
config = ComparatorConfig.from_env()
