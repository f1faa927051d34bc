"""Filesystem access for generated files."""

from __future__ import annotations

import logging
from pathlib import Path

from phpgen.errors import ReadFailure, WriteFailure

logger = logging.getLogger(__name__)


def write_file(path: str | Path, content: str) -> int:
    """Write content to path as UTF-8, replacing any existing file.

    Parent directories are created as needed. Line endings are written
    exactly as given.

    Returns:
        Number of bytes written.

    Raises:
        WriteFailure: If the file or its parent directory cannot be written,
            or the content cannot be encoded as UTF-8.
    """
    target = Path(path)
    try:
        data = content.encode("utf-8")
        target.parent.mkdir(parents=True, exist_ok=True)
        written = target.write_bytes(data)
    except UnicodeEncodeError as e:
        raise WriteFailure(target, f"not encodable as UTF-8 ({e.reason})") from e
    except OSError as e:
        raise WriteFailure(target, e.strerror or str(e)) from e
    logger.debug("Wrote %d bytes to %s", written, target)
    return written


def read_file(path: str | Path) -> str:
    """Read a UTF-8 text file without newline translation.

    Raises:
        ReadFailure: If the file does not exist or cannot be decoded.
    """
    source = Path(path)
    try:
        content = source.read_bytes().decode("utf-8")
    except OSError as e:
        raise ReadFailure(source, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise ReadFailure(source, f"not valid UTF-8 ({e.reason})") from e
    logger.debug("Read %d characters from %s", len(content), source)
    return content
