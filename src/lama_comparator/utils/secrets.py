"""
Secret Resolution
-----------------
API keys come from the environment first and from AWS Secrets Manager
otherwise. Secrets Manager values are cached for the life of the process.
"""

import json
import logging
from typing import Dict, Optional

import boto3
from botocore.exceptions import ClientError

from ..errors import ConfigurationError

# Setup logger (compatible with both local and Lambda)
logger = logging.getLogger(__name__)

# Lazy initialization
_secrets_client = None
_SECRET_CACHE: Dict[str, str] = {}


def _get_secrets_client(region: str):
    """Lazily initialize Secrets Manager client."""
    global _secrets_client
    if _secrets_client is None:
        logger.info(f"Initializing Secrets Manager client in region: {region}")
        _secrets_client = boto3.client("secretsmanager", region_name=region)
    return _secrets_client


def get_secret_value(secret_name: str, key_name: str, region: str) -> str:
    """
    Fetch one key from a JSON secret stored in Secrets Manager.

    Args:
        secret_name: Secret id or ARN
        key_name: Key inside the secret's JSON object
        region: AWS region of the secret

    Returns:
        The key's string value

    Raises:
        ConfigurationError: if the secret is unreadable or lacks the key
    """
    cache_key = f"{secret_name}:{key_name}"
    if cache_key in _SECRET_CACHE:
        return _SECRET_CACHE[cache_key]

    try:
        logger.info(f"Fetching secret '{secret_name}' to get key '{key_name}'")
        response = _get_secrets_client(region).get_secret_value(SecretId=secret_name)
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code")
        logger.error(f"AWS ClientError for '{secret_name}': {error_code}")
        raise ConfigurationError(f"Could not read secret '{secret_name}': {error_code}")

    raw = response.get("SecretString")
    if raw is None and "SecretBinary" in response:
        raw = response["SecretBinary"].decode("utf-8")

    try:
        secret_dict = json.loads(raw or "")
    except json.JSONDecodeError:
        raise ConfigurationError(f"Secret '{secret_name}' is not a JSON object")

    value = secret_dict.get(key_name) if isinstance(secret_dict, dict) else None
    if not value or not isinstance(value, str):
        raise ConfigurationError(f"Key '{key_name}' not found in secret '{secret_name}'")

    _SECRET_CACHE[cache_key] = value
    return value


def resolve_api_key(
    env_value: Optional[str],
    secret_name: Optional[str],
    key_name: str,
    region: str,
) -> str:
    """Return the API key from the environment, falling back to Secrets Manager."""
    if env_value:
        return env_value
    if secret_name:
        return get_secret_value(secret_name, key_name, region)
    raise ConfigurationError(f"Missing {key_name}: set it in the environment or via a secret")
