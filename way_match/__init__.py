"""
way-match - BM25 matcher for ways (named workflow profiles).

Modes:
- pair: score one way description + vocabulary against a prompt
- score: rank a JSONL corpus of ways against a prompt
- suggest: find vocabulary gaps between a way file's body and its metadata
"""

__version__ = "0.1.0"
