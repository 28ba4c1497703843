"""
Call the OpenAI vision API with an uploaded image and parse a keyword list.
Fail-soft: every failure (no key, unreadable image, transport error, bad JSON)
resolves to an empty list and is only logged.
"""

from __future__ import annotations

import base64
import json
import re
from pathlib import Path
from typing import Any

from openai import OpenAI

from product_search import logging_utils as logging_utils_module
from product_search.config import SearchConfig
from product_search.prompts import get_user_content_keywords

ImageSource = bytes | str | Path

_FENCE_RE = re.compile(r"^```(?:json)?\s*([\s\S]*?)\s*```$")


def _get_client(config: SearchConfig) -> OpenAI | None:
    """Return OpenAI client or None if no API key. Single attempt, bounded timeout."""
    if not config.openai_api_key:
        return None
    return OpenAI(
        api_key=config.openai_api_key,
        timeout=config.vision_timeout_s,
        max_retries=0,
    )


def _read_image(source: ImageSource) -> bytes:
    """Image bytes from raw bytes or a file path. Raises OSError or ValueError when unreadable."""
    if isinstance(source, bytes):
        return source
    return Path(source).read_bytes()


def _image_content(data: bytes) -> dict[str, Any]:
    b64 = base64.b64encode(data).decode("ascii")
    return {"type": "image_url", "image_url": {"url": f"data:image/jpeg;base64,{b64}"}}


def build_messages(data: bytes) -> list[dict[str, Any]]:
    """Single user message: instruction text + base64 data URL of the image."""
    return [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": get_user_content_keywords()},
                _image_content(data),
            ],
        }
    ]


def _message_content(resp: Any) -> str | None:
    """First decode step: service envelope -> choices[0].message.content."""
    try:
        content = resp.choices[0].message.content
    except (AttributeError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) else None


def parse_keywords(content: str | None) -> list[str]:
    """
    Second decode step: message content -> {"keywords": [...]}.
    Returns lowercased, stripped string entries; [] for anything malformed.
    """
    text = (content or "").strip()
    match = _FENCE_RE.match(text)
    if match:
        text = match.group(1)
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return []
    if not isinstance(parsed, dict):
        return []
    keywords = parsed.get("keywords")
    if not isinstance(keywords, list):
        return []
    return [kw.strip().lower() for kw in keywords if isinstance(kw, str) and kw.strip()]


def _request_keywords(client: OpenAI, image: ImageSource, config: SearchConfig) -> list[str]:
    try:
        data = _read_image(image)
    except (OSError, TypeError, ValueError) as e:
        logging_utils_module.log_event("vision_keywords_failed", stage="read_image", reason=str(e))
        return []

    try:
        resp = client.chat.completions.create(
            model=config.vision_model,
            messages=build_messages(data),
            temperature=config.vision_temperature,
            max_tokens=config.vision_max_tokens,
        )
    except Exception as e:
        logging_utils_module.log_event("vision_keywords_failed", stage="request", reason=str(e))
        return []

    content = _message_content(resp)
    if content is None:
        logging_utils_module.log_event("vision_keywords_failed", stage="envelope", reason="missing message content")
        return []

    keywords = parse_keywords(content)
    if not keywords:
        logging_utils_module.log_event("vision_keywords_failed", stage="content", reason="no keywords in content")
    return keywords


def resolve_external_keywords(
    image: ImageSource,
    config: SearchConfig | None = None,
) -> list[str]:
    """Keywords for the image from the vision service, or [] on any failure. Never raises."""
    if config is None:
        config = SearchConfig.from_env()
    client = _get_client(config)
    if client is None:
        return []
    try:
        return _request_keywords(client, image, config)
    finally:
        client.close()
