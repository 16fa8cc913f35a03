"""Text helpers for host handling, AJAX payload cleanup and label lists."""

import json
import logging
import re
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# The endpoint sometimes leaks ``targetLink...`` script tokens into the
# JSON body; they are not valid JSON and must be removed before decoding.
_CORRUPTING_TOKEN = re.compile(r'targetLink\S+')
_SCHEME_PREFIX = re.compile(r'^https?://', re.IGNORECASE)


def normalize_host(host: str) -> str:
    """Reduce a host or URL to a bare host name (scheme and trailing slashes removed)."""
    if not host:
        return ""
    return _SCHEME_PREFIX.sub('', host.strip()).rstrip('/')


def strip_corrupting_tokens(raw: str) -> str:
    """Remove ``targetLink`` tokens from a raw AJAX response body."""
    return _CORRUPTING_TOKEN.sub('', raw)


def decode_payload(raw: Optional[str]) -> Optional[Dict[str, Any]]:
    """Decode an AJAX response body into a dict.

    Returns None for empty bodies, bodies that are not valid JSON after
    token stripping, and JSON values that are not objects.
    """
    if not raw or not raw.strip():
        logger.debug("Empty AJAX response body")
        return None

    cleaned = strip_corrupting_tokens(raw)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning(f"Could not decode AJAX response: {e}")
        logger.debug(f"Response was: {cleaned[:200]}...")
        return None

    if not isinstance(payload, dict):
        logger.warning(f"AJAX response decoded to {type(payload).__name__}, expected an object")
        return None

    return payload


def split_labels(text: str) -> List[str]:
    """Split a comma-joined label list, trimming entries and skipping empty ones."""
    if not text:
        return []
    return [label.strip() for label in text.split(',') if label.strip()]
