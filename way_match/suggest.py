"""
Vocabulary suggestions for way files.

A way file starts with a frontmatter block:

    ---
    description: debugging code issues, troubleshooting errors
    vocabulary: debug breakpoint stacktrace
    ---
    Body text...

The analyzer tokenizes the body, compares its term frequencies against the
declared description + vocabulary and reports:
- GAPS: frequent body terms the metadata does not cover
- COVERAGE: body terms the metadata already covers
- UNUSED: vocabulary words that never occur in the body
- VOCABULARY: current vocabulary plus the gap words

Pure analysis - never writes files.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from .bm25 import Stemmer, tokenize, tokenize_pairs
from .config import MatchSettings
from .errors import FrontmatterError, InputFileError

logger = logging.getLogger(__name__)

MARKER = "---"


@dataclass
class Frontmatter:
    description: str = ""
    vocabulary: str = ""


@dataclass
class SuggestEntry:
    """Body stem with its most readable surface form"""
    stem: str
    original: str
    freq: int = 1
    covered: bool = False

    def format(self) -> str:
        return f"{self.original}\t{self.freq}\t{self.stem}"


class SuggestStatus(str, Enum):
    GAPS_FOUND = "gaps_found"
    COMPLETE = "complete"


@dataclass
class SuggestReport:
    """Categorized comparison of a way body against its metadata"""
    vocabulary: str
    min_freq: int
    entries: List[SuggestEntry] = field(default_factory=list)
    unused: List[str] = field(default_factory=list)

    @property
    def gaps(self) -> List[SuggestEntry]:
        return [e for e in self.entries if not e.covered and e.freq >= self.min_freq]

    @property
    def coverage(self) -> List[SuggestEntry]:
        return [e for e in self.entries if e.covered]

    @property
    def suggested_vocabulary(self) -> str:
        words = [self.vocabulary] if self.vocabulary else []
        words.extend(e.original for e in self.gaps)
        return " ".join(words)

    @property
    def status(self) -> SuggestStatus:
        return SuggestStatus.GAPS_FOUND if self.gaps else SuggestStatus.COMPLETE

    def format_lines(self) -> List[str]:
        """Machine-parseable report: section headers followed by tab-separated rows."""
        lines = ["GAPS"]
        lines.extend(e.format() for e in self.gaps)
        lines.append("COVERAGE")
        lines.extend(e.format() for e in self.coverage)
        lines.append("UNUSED")
        lines.extend(self.unused)
        lines.append("VOCABULARY")
        lines.append(self.suggested_vocabulary)
        return lines

    def summary(self) -> str:
        return (
            f"suggest: {len(self.gaps)} gaps (min_freq={self.min_freq}), "
            f"{len(self.coverage)} covered, {len(self.unused)} unused"
        )


def split_frontmatter(content: str, path: Optional[Union[str, Path]] = None) -> Tuple[str, str]:
    """
    Split a way file into its metadata block and body.

    Args:
        content: Whole file content
        path: Used in error messages only

    Returns:
        (metadata_text, body)

    Raises:
        FrontmatterError: If the opening or closing marker is missing
    """
    opening = MARKER + "\n"
    if not content.startswith(opening):
        raise FrontmatterError("no YAML frontmatter found", path)

    # Search from the opening newline so an empty block (---\n---) closes
    start = len(MARKER)
    end = content.find("\n" + MARKER + "\n", start)
    if end < 0:
        end = content.find("\n" + MARKER, start)
        if end < 0:
            raise FrontmatterError("unterminated frontmatter", path)

    metadata = content[len(opening):end] if end > start else ""
    body_start = end + 1 + len(MARKER)
    if content.startswith("\n", body_start):
        body_start += 1
    return metadata, content[body_start:]


def parse_frontmatter(metadata: str) -> Frontmatter:
    """Pick description: and vocabulary: lines (last occurrence wins)."""
    result = Frontmatter()
    for line in metadata.split("\n"):
        for key in ("description", "vocabulary"):
            prefix = key + ":"
            if line.startswith(prefix):
                value = line[len(prefix):].lstrip(" ").rstrip("\r")
                setattr(result, key, value)
    return result


def _body_entries(body: str, stemmer: Stemmer, settings: MatchSettings) -> Dict[str, SuggestEntry]:
    entries: Dict[str, SuggestEntry] = {}
    for pair in tokenize_pairs(body, stemmer, settings.max_tokens, settings.max_token_length):
        entry = entries.get(pair.stem)
        if entry is None:
            entries[pair.stem] = SuggestEntry(stem=pair.stem, original=pair.original)
            continue
        entry.freq += 1
        # Keep longest original form (most readable)
        if len(pair.original) > len(entry.original):
            entry.original = pair.original
    return entries


def _unused_vocabulary(
    vocabulary: str,
    body_stems: Dict[str, SuggestEntry],
    stemmer: Stemmer,
    settings: MatchSettings,
) -> List[str]:
    unused = []
    for word in vocabulary.split():
        stemmed = stemmer.stem(word[:settings.max_token_length].lower())
        if stemmed not in body_stems:
            unused.append(word)
    return unused


def analyze(
    content: str,
    stemmer: Stemmer,
    min_freq: Optional[int] = None,
    settings: Optional[MatchSettings] = None,
    path: Optional[Union[str, Path]] = None,
) -> SuggestReport:
    """
    Compare a way body against its declared description and vocabulary.

    Args:
        content: Whole way file content
        stemmer: Owned stemmer instance
        min_freq: Minimum body frequency for a gap (default: settings.min_freq)
        settings: Bounds and defaults
        path: Used in error messages only

    Returns:
        SuggestReport with entries sorted by frequency desc, then stem

    Raises:
        FrontmatterError: If the metadata block is missing or unterminated
    """
    settings = settings or MatchSettings()
    if min_freq is None:
        min_freq = settings.min_freq

    metadata, body = split_frontmatter(content, path)
    frontmatter = parse_frontmatter(metadata)

    entries = _body_entries(body, stemmer, settings)

    declared = set(tokenize(
        f"{frontmatter.description} {frontmatter.vocabulary}",
        stemmer,
        settings.max_tokens,
        settings.max_token_length,
    ))
    for entry in entries.values():
        entry.covered = entry.stem in declared

    unused = _unused_vocabulary(frontmatter.vocabulary, entries, stemmer, settings)

    ordered = sorted(entries.values(), key=lambda e: (-e.freq, e.stem))

    logger.debug(f"Body: {len(ordered)} unique stems, {len(declared)} declared stems")
    return SuggestReport(
        vocabulary=frontmatter.vocabulary,
        min_freq=min_freq,
        entries=ordered,
        unused=unused,
    )


def read_way_file(path: Union[str, Path], settings: Optional[MatchSettings] = None) -> str:
    """
    Read a way file, at most settings.max_file_bytes bytes.

    Raises:
        InputFileError: If the file cannot be opened or read
    """
    settings = settings or MatchSettings()
    try:
        with open(path, "rb") as f:
            raw = f.read(settings.max_file_bytes)
    except OSError as e:
        raise InputFileError(path, e.strerror) from e
    return raw.decode("utf-8", errors="replace")


def analyze_file(
    path: Union[str, Path],
    stemmer: Stemmer,
    min_freq: Optional[int] = None,
    settings: Optional[MatchSettings] = None,
) -> SuggestReport:
    """Read a way file and analyze it (see analyze())."""
    content = read_way_file(path, settings)
    return analyze(content, stemmer, min_freq=min_freq, settings=settings, path=path)
