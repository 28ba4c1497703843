"""Service configuration from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _split_tokens(raw: str) -> frozenset[str]:
    return frozenset(t.strip() for t in raw.split(",") if t.strip())


@dataclass(frozen=True)
class SearchConfig:
    openai_api_key: str = ""
    vision_model: str = "gpt-4.1-mini"
    vision_timeout_s: float = 20.0
    vision_temperature: float = 0.1
    vision_max_tokens: int = 120
    api_tokens: frozenset[str] = field(default_factory=frozenset)
    catalog_path: str = ""

    @classmethod
    def from_env(cls) -> "SearchConfig":
        return cls(
            openai_api_key=(os.environ.get("OPENAI_API_KEY") or "").strip(),
            vision_model=os.environ.get("VISION_MODEL", cls.vision_model).strip() or cls.vision_model,
            vision_timeout_s=float(os.environ.get("VISION_TIMEOUT_S", str(cls.vision_timeout_s))),
            vision_temperature=float(os.environ.get("VISION_TEMPERATURE", str(cls.vision_temperature))),
            vision_max_tokens=int(os.environ.get("VISION_MAX_TOKENS", str(cls.vision_max_tokens))),
            api_tokens=_split_tokens(os.environ.get("SEARCH_API_TOKENS", "")),
            catalog_path=(os.environ.get("CATALOG_PATH") or "").strip(),
        )
