"""
Matcher settings: BM25 parameters, thresholds and resource bounds.

Defaults can be overridden from the environment (or a .env.local / .env file
in the working directory); command-line flags override both.

Environment variables:
    WAY_MATCH_K1          BM25 k1 (default 1.2)
    WAY_MATCH_B           BM25 b (default 0.75)
    WAY_MATCH_THRESHOLD   match threshold for pair/score (default 2.0)
    WAY_MATCH_MIN_FREQ    minimum body frequency for suggest gaps (default 2)
    LOG_LEVEL             console log level (default WARNING)
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

ENV_PREFIX = "WAY_MATCH_"


class MatchSettings(BaseModel):
    """Validated configuration shared by all commands"""

    model_config = ConfigDict(frozen=True)

    k1: float = Field(default=1.2, ge=0.0, description="BM25 term frequency saturation")
    b: float = Field(default=0.75, ge=0.0, le=1.0, description="BM25 length normalization")
    threshold: float = Field(default=2.0, description="Minimum score for a match")
    min_freq: int = Field(default=2, ge=1, description="Minimum body frequency for a vocabulary gap")

    max_documents: int = Field(default=256, ge=1, description="Documents kept per corpus")
    max_tokens: int = Field(default=4096, ge=1, description="Tokens kept per text")
    max_token_length: int = Field(default=127, ge=3, description="Letters kept per word")
    max_line_length: int = Field(default=8192, ge=1, description="Longest accepted corpus line")
    max_file_bytes: int = Field(default=65536, ge=1, description="Bytes read from a way file")

    @classmethod
    def from_env(cls, env_dir: Optional[Path] = None, **overrides) -> "MatchSettings":
        """
        Build settings from environment variables plus explicit overrides.

        Args:
            env_dir: Directory holding .env.local / .env (default: cwd)
            **overrides: Values taking priority over the environment;
                None values are ignored

        Raises:
            pydantic.ValidationError: If a value is out of range
        """
        load_env_files(env_dir)

        values = {}
        for name in ("k1", "b", "threshold", "min_freq"):
            raw = os.getenv(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None and raw.strip():
                values[name] = raw.strip()

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def load_env_files(env_dir: Optional[Path] = None) -> Optional[Path]:
    """Load .env.local (preferred) or .env; returns the file used, if any."""
    base = Path(env_dir) if env_dir is not None else Path.cwd()
    env_local = base / ".env.local"
    env_file = base / ".env"

    # Real environment wins over files
    if env_local.exists():
        load_dotenv(env_local, override=False)
        logger.debug(f"Loaded environment from {env_local}")
        return env_local
    if env_file.exists():
        load_dotenv(env_file, override=False)
        logger.debug(f"Loaded environment from {env_file}")
        return env_file
    return None
