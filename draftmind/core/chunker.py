"""
Sentence-window chunker.

Splits plain document text into overlapping, content-addressed chunks.
Output is a pure function of the input text so that chunk hashes stay
stable across re-chunk passes.

Dependencies: hashlib, re, draftmind.models.chunk
System role: First stage of the embedding pipeline
"""

import hashlib
import math
import re

from draftmind.models.chunk import Chunk

DEFAULT_CHUNK_SIZE = 500
DEFAULT_OVERLAP_RATIO = 0.2
DEFAULT_MIN_CHUNK_LENGTH = 20

# Whitespace preceded by sentence-ending punctuation
_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")


def hash_text(text: str) -> str:
    """
    Compute the content address of a chunk.

    Args:
        text: Chunk text

    Returns:
        str: SHA-256 hex digest of the UTF-8 encoded text
    """
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def split_sentences(text: str) -> list[str]:
    """Split text on whitespace that follows '.', '!' or '?'."""
    return _SENTENCE_BOUNDARY.split(text)


def _overlap_seed(chunk: str, overlap_ratio: float) -> str:
    """Trailing words of a closed chunk used to open the next one."""
    words = chunk.split(" ")
    keep = math.floor(len(words) * overlap_ratio)
    if keep <= 0:
        return ""
    return " ".join(words[-keep:])


def chunk_text(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap_ratio: float = DEFAULT_OVERLAP_RATIO,
    min_chunk_length: int = DEFAULT_MIN_CHUNK_LENGTH,
) -> list[Chunk]:
    """
    Chunk document text for embedding.

    Sentences are accumulated greedily. When adding the next sentence would
    push a non-empty buffer past chunk_size, the buffer is closed and the
    next one is seeded with the trailing overlap_ratio of its words. A single
    sentence longer than chunk_size is kept whole.

    Args:
        text: Plain document text
        chunk_size: Soft maximum chunk length in characters
        overlap_ratio: Fraction of the closed chunk's words carried forward
        min_chunk_length: Chunks with this many characters or fewer are dropped

    Returns:
        list[Chunk]: Ordered chunks with content hashes
    """
    if not text or not text.strip():
        return []

    pieces: list[str] = []
    buffer = ""

    for sentence in split_sentences(text):
        if len(buffer + sentence) > chunk_size and buffer:
            closed = buffer.strip()
            pieces.append(closed)
            buffer = _overlap_seed(closed, overlap_ratio) + " " + sentence
        else:
            buffer += (" " if buffer else "") + sentence

    if buffer.strip():
        pieces.append(buffer.strip())

    return [
        Chunk(text=piece, hash=hash_text(piece))
        for piece in pieces
        if len(piece) > min_chunk_length
    ]
