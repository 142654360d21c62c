"""
JSONL way corpus loading.

One JSON object per line:
    {"id": "testing", "description": "...", "vocabulary": "...", "threshold": 2.5}

`id` and `description` are required; `vocabulary` defaults to empty and a
missing or non-positive `threshold` means "use the global threshold".
Malformed lines are skipped with a warning and never abort the load.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .bm25 import Corpus, Document, Stemmer
from .config import MatchSettings
from .errors import InputFileError

logger = logging.getLogger(__name__)


class WayRecord(BaseModel):
    """One corpus line; unknown keys are ignored"""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Way identifier")
    description: str = Field(..., description="Way description text")
    vocabulary: str = Field(default="", description="Space-separated domain keywords")
    threshold: Optional[float] = Field(
        default=None,
        description="Per-way match threshold; None or <= 0 uses the global threshold"
    )

    @property
    def effective_threshold(self) -> Optional[float]:
        if self.threshold is None or self.threshold <= 0:
            return None
        return self.threshold


def parse_record_line(line: str, line_number: int = 0) -> Optional[WayRecord]:
    """
    Parse one JSONL line into a WayRecord.

    Returns:
        WayRecord, or None for blank, malformed or incomplete lines
    """
    stripped = line.strip()
    if not stripped:
        return None

    try:
        data = json.loads(stripped)
    except json.JSONDecodeError as e:
        logger.warning(f"Line {line_number}: skipping invalid JSON ({e.msg})")
        return None

    if not isinstance(data, dict):
        logger.warning(f"Line {line_number}: skipping non-object record")
        return None

    try:
        return WayRecord.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        logger.warning(f"Line {line_number}: skipping record with missing/invalid fields: {fields}")
        return None


def read_records(path: Union[str, Path], settings: Optional[MatchSettings] = None) -> List[WayRecord]:
    """
    Read way records from a JSONL file.

    Args:
        path: JSONL corpus path
        settings: Bounds (max_documents, max_line_length)

    Returns:
        Valid records in file order, at most settings.max_documents

    Raises:
        InputFileError: If the file cannot be opened or read
    """
    settings = settings or MatchSettings()
    records: List[WayRecord] = []

    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            for line_number, line in enumerate(f, start=1):
                if len(records) >= settings.max_documents:
                    logger.debug(f"Reached {settings.max_documents} records, ignoring the rest of {path}")
                    break
                if len(line) > settings.max_line_length:
                    logger.warning(f"Line {line_number}: skipping record longer than {settings.max_line_length} chars")
                    continue
                record = parse_record_line(line, line_number)
                if record is not None:
                    records.append(record)
    except OSError as e:
        raise InputFileError(path, e.strerror) from e

    logger.info(f"Loaded {len(records)} way records from {path}")
    return records


def build_corpus(
    records: List[WayRecord],
    stemmer: Stemmer,
    settings: Optional[MatchSettings] = None,
) -> Corpus:
    """Index records into a Corpus (avgdl covers only the loaded records)."""
    settings = settings or MatchSettings()
    documents = [
        Document.index(
            record.id,
            record.description,
            record.vocabulary,
            stemmer=stemmer,
            threshold=record.effective_threshold,
            max_tokens=settings.max_tokens,
            max_token_length=settings.max_token_length,
        )
        for record in records
    ]
    return Corpus(documents, max_documents=settings.max_documents)


def load_corpus(
    path: Union[str, Path],
    stemmer: Stemmer,
    settings: Optional[MatchSettings] = None,
) -> Corpus:
    """Read a JSONL file and index it into a Corpus."""
    return build_corpus(read_records(path, settings), stemmer, settings)
