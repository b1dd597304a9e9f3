"""
Retrieval ranking logic.

Scores stored vectors against a query vector, keeps the top K and drops
anything at or below the relevance threshold.

Dependencies: draftmind.core.similarity, draftmind.boundary.vdb.vector_schemas
System role: RAG retrieval business logic
"""

from collections.abc import Sequence

from draftmind.boundary.vdb.vector_schemas import ScoredChunk, StoredVector
from draftmind.core.similarity import as_vector, cosine_similarity

DEFAULT_TOP_K = 3
DEFAULT_THRESHOLD = 0.3
CONTEXT_SEPARATOR = "\n\n"


class Retriever:
    """Linear-scan similarity ranking over one model's vectors."""

    def __init__(self, top_k: int = DEFAULT_TOP_K, threshold: float = DEFAULT_THRESHOLD) -> None:
        """
        Initialize retriever with default ranking parameters.

        Args:
            top_k: Number of results kept before thresholding
            threshold: Results scoring at or below this are dropped
        """
        self.top_k = top_k
        self.threshold = threshold

    def rank(
        self,
        query_vector: Sequence[float],
        stored: Sequence[StoredVector],
        top_k: int | None = None,
        threshold: float | None = None,
    ) -> list[ScoredChunk]:
        """
        Rank stored vectors by cosine similarity to the query.

        Args:
            query_vector: Query embedding
            stored: Candidate vectors for a single model namespace
            top_k: Override for the number of results kept
            threshold: Override for the relevance threshold

        Returns:
            list[ScoredChunk]: Most relevant first, all scores above threshold
        """
        k = self.top_k if top_k is None else top_k
        floor = self.threshold if threshold is None else threshold
        if k <= 0 or not stored:
            return []

        query = as_vector(query_vector)
        scored = [
            ScoredChunk(
                text=record.chunk_text,
                chunk_hash=record.chunk_hash,
                score=cosine_similarity(query, record.vector),
            )
            for record in stored
        ]
        # sorted() is stable, so ties keep insertion order
        scored = sorted(scored, key=lambda item: item.score, reverse=True)[:k]
        return [item for item in scored if item.score > floor]


def build_context(results: Sequence[ScoredChunk]) -> str:
    """
    Concatenate ranked chunk texts into a prompt context block.

    Args:
        results: Ranked retrieval results

    Returns:
        str: Texts in rank order separated by blank lines
    """
    return CONTEXT_SEPARATOR.join(result.text for result in results)
