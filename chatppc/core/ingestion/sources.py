"""
Source identifier normalization and markdown file discovery.

Dependencies: pathlib
System role: Gives every document one canonical source identifier
"""

import re
from pathlib import Path

_REPEATED_SLASHES = re.compile(r"/{2,}")


def normalize_source(source: str) -> str:
    """
    Canonicalize a source identifier.

    Backslashes become forward slashes and runs of slashes collapse to
    one, so "docs\\a.md" and "docs//a.md" both map to "docs/a.md". The
    identifier is otherwise treated as opaque.

    Args:
        source: File path or upload filename

    Returns:
        str: Canonical source identifier
    """
    return _REPEATED_SLASHES.sub("/", source.strip().replace("\\", "/"))


def find_markdown_files(directory: str | Path, extension: str = ".md") -> list[str]:
    """
    List files with the given extension directly inside directory.

    Not recursive. Results are sorted and returned as normalized source
    identifiers built from the directory path as given.

    Args:
        directory: Directory to scan
        extension: File suffix to match (case-sensitive, like the CLI contract)

    Returns:
        list[str]: Normalized paths of matching files

    Raises:
        OSError: When the directory cannot be read
    """
    base = Path(directory)
    names = sorted(
        entry.name for entry in base.iterdir() if entry.is_file() and entry.name.endswith(extension)
    )
    return [normalize_source(f"{base.as_posix()}/{name}") for name in names]
