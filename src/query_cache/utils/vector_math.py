"""Vector math used by the semantic cache and catalog ranking."""

from collections.abc import Sequence

import numpy as np

Vector = Sequence[float] | np.ndarray


def as_vector(values: Vector) -> np.ndarray:
    """Return a read-only float64 copy of ``values``."""
    vector = np.array(values, dtype=np.float64)
    vector.flags.writeable = False
    return vector


def cosine_similarity(a: Vector, b: Vector) -> float:
    """Calculate cosine similarity between two vectors.

    Mismatched lengths, empty vectors and zero-magnitude vectors all score
    0.0 instead of raising, so callers can rank and filter without guards.

    Args:
        a: First vector
        b: Second vector

    Returns:
        Similarity in [-1, 1]
    """
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)

    if va.ndim != 1 or va.shape != vb.shape or va.size == 0:
        return 0.0

    norm_a = float(np.dot(va, va))
    norm_b = float(np.dot(vb, vb))
    if norm_a <= 0 or norm_b <= 0:
        return 0.0

    similarity = float(np.dot(va, vb)) / (np.sqrt(norm_a) * np.sqrt(norm_b))
    # Rounding can push identical vectors just past 1.0
    return max(-1.0, min(1.0, similarity))


def top_k_similar(
    query: Vector,
    candidates: Sequence[Vector],
    top_k: int = 10,
    min_similarity: float = 0.0,
) -> list[tuple[int, float]]:
    """Score a query vector against many candidates.

    Args:
        query: The query vector
        candidates: Candidate vectors, in catalog order
        top_k: Maximum number of results
        min_similarity: Drop candidates scoring below this value

    Returns:
        List of (candidate index, similarity), best first. Equal scores keep
        candidate order.
    """
    if top_k <= 0 or not candidates:
        return []

    q = np.asarray(query, dtype=np.float64)
    scores = np.zeros(len(candidates), dtype=np.float64)

    valid = [i for i, c in enumerate(candidates) if len(c) == q.size]
    q_norm = float(np.linalg.norm(q)) if q.ndim == 1 else 0.0
    if valid and q_norm > 0:
        matrix = np.asarray([candidates[i] for i in valid], dtype=np.float64)
        norms = np.linalg.norm(matrix, axis=1)
        dots = matrix @ q
        with np.errstate(divide="ignore", invalid="ignore"):
            sims = np.where(norms > 0, dots / (norms * q_norm), 0.0)
        scores[valid] = np.clip(sims, -1.0, 1.0)

    order = np.argsort(-scores, kind="stable")
    results = []
    for index in order:
        score = float(scores[index])
        if score < min_similarity:
            continue
        results.append((int(index), score))
        if len(results) == top_k:
            break
    return results
