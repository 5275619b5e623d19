import json
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..config import ComparatorConfig
from ..errors import UpstreamServiceError

# Setup logger (compatible with both local and Lambda)
logger = logging.getLogger(__name__)


class BedrockClient:
    """Text completion through Amazon Bedrock (Anthropic messages API)."""

    def __init__(self, cfg: ComparatorConfig):
        self.model_id = cfg.bedrock_model_id
        self.region = cfg.aws_region
        self._bedrock = None

    @property
    def bedrock(self):
        """Lazily initialize Bedrock client."""
        if self._bedrock is None:
            logger.info(f"Initializing Bedrock client in region: {self.region}")
            self._bedrock = boto3.client("bedrock-runtime", region_name=self.region)
        return self._bedrock

    def generate(self, prompt: str) -> str:
        logger.info(f"Calling Bedrock model: {self.model_id} (prompt {len(prompt)} chars)")

        body = json.dumps({
            "anthropic_version": "bedrock-2023-05-31",
            "max_tokens": 1024,
            "messages": [
                {
                    "role": "user",
                    "content": prompt
                }
            ]
        })

        try:
            response = self.bedrock.invoke_model(
                modelId=self.model_id,
                contentType="application/json",
                accept="application/json",
                body=body
            )
            result = json.loads(response["body"].read().decode())
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code")
            logger.error(f"Bedrock LLM error: {error_code}")
            raise UpstreamServiceError(f"Bedrock error: {error_code}")
        except (BotoCoreError, OSError) as e:
            logger.error(f"Bedrock connection error: {e}")
            raise UpstreamServiceError(f"Bedrock connection error: {e}")
        except ValueError as e:
            raise UpstreamServiceError(f"Bedrock returned invalid JSON: {e}")

        content = result.get("content") if isinstance(result, dict) else None
        content = content or []
        text = "".join(block.get("text") or "" for block in content).strip()
        if not text:
            raise UpstreamServiceError("Unexpected Bedrock response: empty text")
        return text
