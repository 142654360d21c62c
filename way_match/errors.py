"""
Error types for way-match.

Hard failures only. "Nothing matched" and "vocabulary already complete" are
normal outcomes reported through result statuses, never exceptions.
"""

from pathlib import Path
from typing import Optional, Union


class WayMatchError(Exception):
    """Base class for failures that abort the current command"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputFileError(WayMatchError):
    """Input path could not be opened or read"""

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None):
        self.path = str(path)
        message = f"cannot open {self.path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class FrontmatterError(WayMatchError):
    """Way file lacks a well-formed leading metadata block"""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.path = str(path) if path is not None else None
        if self.path:
            message = f"{message} in {self.path}"
        super().__init__(message)
