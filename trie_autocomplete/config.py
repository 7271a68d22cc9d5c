"""Runtime settings, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

from trie_autocomplete.store import DEFAULT_STORE_KEY
from trie_autocomplete.trie import DEFAULT_MAX_WORD_LENGTH


@dataclass
class Settings:
    host: str = "0.0.0.0"
    port: int = 5000
    debug: bool = False
    store_url: str = "memory://"
    store_key: str = DEFAULT_STORE_KEY
    max_word_length: int = DEFAULT_MAX_WORD_LENGTH
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        origins = [o.strip() for o in env.get("CORS_ORIGINS", "*").split(",") if o.strip()]
        return cls(
            host=env.get("HOST", "0.0.0.0"),
            port=int(env.get("PORT", 5000)),
            debug=env.get("FLASK_DEBUG", "0") == "1",
            store_url=env.get("WORD_STORE_URL", "memory://"),
            store_key=env.get("WORD_STORE_KEY", DEFAULT_STORE_KEY),
            max_word_length=int(env.get("MAX_WORD_LENGTH", DEFAULT_MAX_WORD_LENGTH)),
            cors_origins=origins or ["*"],
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
