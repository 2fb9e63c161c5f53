"""
Chunker Module

Splits oversized submissions into pieces the model accepts.

Chunks are contiguous character slices with no overlap, so boundaries may
fall mid-statement. Joining the chunks in order gives back the input exactly.
"""

from typing import List

DEFAULT_CHUNK_SIZE = 5000


def split_into_chunks(text: str, size: int = DEFAULT_CHUNK_SIZE) -> List[str]:
    """
    Partition text into contiguous slices of at most ``size`` characters.

    Args:
        text: Text to split
        size: Maximum characters per chunk

    Returns:
        Chunks in original order; empty list for empty text

    Raises:
        ValueError: If size is not positive
    """
    if size <= 0:
        raise ValueError(f"Chunk size must be positive, got {size}")

    return [text[start:start + size] for start in range(0, len(text), size)]
