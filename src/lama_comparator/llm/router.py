"""
Completion Router
-----------------
Routes prompts to the configured text-completion provider.
"""

import logging
from typing import Optional

from ..config import ComparatorConfig, LLMProvider, get_llm_provider
from .bedrock_client import BedrockClient
from .gemini_client import GeminiClient

# Setup logger (compatible with both local and Lambda)
logger = logging.getLogger(__name__)


class CompletionRouter:
    """
    Routes completion requests to the appropriate provider.

    Routing Logic:
    - LLM_PROVIDER=gemini (default) → Gemini generateContent
    - LLM_PROVIDER=bedrock → Amazon Bedrock
    """

    def __init__(self, cfg: ComparatorConfig):
        self.config = cfg
        self.provider = get_llm_provider(cfg)
        self._gemini: Optional[GeminiClient] = None
        self._bedrock: Optional[BedrockClient] = None

    @property
    def gemini(self) -> GeminiClient:
        """Lazy initialization of Gemini client."""
        if self._gemini is None:
            self._gemini = GeminiClient(self.config)
        return self._gemini

    @property
    def bedrock(self) -> BedrockClient:
        """Lazy initialization of Bedrock client."""
        if self._bedrock is None:
            self._bedrock = BedrockClient(self.config)
        return self._bedrock

    def generate(self, prompt: str) -> str:
        if self.provider == LLMProvider.BEDROCK:
            return self.bedrock.generate(prompt)
        return self.gemini.generate(prompt)

    __call__ = generate
