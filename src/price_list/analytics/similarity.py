"""Name similarity ranking used by the ``similarity`` sort."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Protocol

import numpy as np

from ..domain import Product
from ..utils.logging import get_logger

logger = get_logger(__name__)

_TOKEN_RE = re.compile(r"[^\W_]+", re.UNICODE)


class SimilarityRanker(Protocol):
    """Reorders items so that similarly named ones sit next to each other."""

    def vectorize(self, items: Sequence[Product]) -> None:
        ...

    def rank(self, items: Sequence[Product]) -> list[Product]:
        ...


def tokenize(name: str) -> list[str]:
    return _TOKEN_RE.findall(name.lower())


class NameSimilarityRanker:
    """Bag-of-words cosine similarity with a greedy nearest-neighbour chain."""

    def __init__(self) -> None:
        self.vectors: dict[str, np.ndarray] = {}

    def vectorize(self, items: Sequence[Product]) -> None:
        tokens = [tokenize(item.name) for item in items]
        vocabulary = {word: i for i, word in enumerate(sorted({w for words in tokens for w in words}))}
        self.vectors = {}
        for item, words in zip(items, tokens):
            vector = np.zeros(len(vocabulary))
            for word in words:
                vector[vocabulary[word]] += 1.0
            norm = np.linalg.norm(vector)
            self.vectors[item.unique_id] = vector / norm if norm > 0 else vector

    def rank(self, items: Sequence[Product]) -> list[Product]:
        if len(items) < 2:
            return list(items)
        missing = [item for item in items if item.unique_id not in self.vectors]
        if missing:
            logger.debug("Vectorizing %d items missing from the ranker cache", len(missing))
            self.vectorize(items)

        matrix = np.vstack([self.vectors[item.unique_id] for item in items])
        similarity = matrix @ matrix.T

        remaining = np.ones(len(items), dtype=bool)
        current = 0
        remaining[current] = False
        order = [current]
        while remaining.any():
            scores = np.where(remaining, similarity[current], -np.inf)
            current = int(np.argmax(scores))
            remaining[current] = False
            order.append(current)
        return [items[i] for i in order]
