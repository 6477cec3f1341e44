"""
Content fingerprinting for change detection.

Dependencies: hashlib
System role: Decides whether a document must be re-indexed
"""

import hashlib

EMPTY_CONTENT_HASH = hashlib.sha256(b"").hexdigest()


def get_document_hash(content: str) -> str:
    """
    Compute the SHA-256 fingerprint of a document's full text.

    Args:
        content: Raw document text (may be empty)

    Returns:
        str: 64-character lowercase hex digest of the UTF-8 bytes
    """
    return hashlib.sha256(content.encode("utf-8")).hexdigest()
