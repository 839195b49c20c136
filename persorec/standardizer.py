import logging
from collections.abc import Mapping as MappingABC
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .errors import EmptyCorpusError, SchemaMismatchError

logger = logging.getLogger(__name__)

FeatureVector = Dict[str, float]


def check_schema(document_id: str, vector: Mapping[str, float], schema: List[str]) -> None:
    """Raise SchemaMismatchError unless the vector has exactly ``schema`` in order."""
    names = list(vector)
    if names == schema:
        return
    missing = [n for n in schema if n not in vector]
    expected = set(schema)
    unexpected = [n for n in names if n not in expected]
    raise SchemaMismatchError(document_id, missing=missing, unexpected=unexpected)


class CorpusDataset(MappingABC):
    """
    Ordered mapping of document id to feature vector, all sharing one schema.

    The schema (feature names and their order) is either given or taken from
    the first document added; every document must match it exactly.
    """

    def __init__(
        self,
        vectors: Optional[Mapping[str, Mapping[str, float]]] = None,
        schema: Optional[Sequence[str]] = None,
    ):
        self._vectors: Dict[str, FeatureVector] = {}
        self._schema: Optional[List[str]] = list(schema) if schema is not None else None
        for document_id, vector in (vectors or {}).items():
            self.add(document_id, vector)

    def add(self, document_id: str, vector: Mapping[str, float]) -> None:
        if self._schema is None:
            self._schema = list(vector)
        else:
            check_schema(document_id, vector, self._schema)
        self._vectors[document_id] = dict(vector)

    @property
    def schema(self) -> List[str]:
        return list(self._schema or [])

    def __getitem__(self, document_id: str) -> FeatureVector:
        return self._vectors[document_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._vectors)

    def __len__(self) -> int:
        return len(self._vectors)

    def matrix(self) -> np.ndarray:
        """Documents x features array in schema order."""
        schema = self.schema
        return np.array(
            [[self._vectors[d][name] for name in schema] for d in self._vectors],
            dtype=float,
        ).reshape(len(self._vectors), len(schema))


def column_statistics(column: np.ndarray) -> Tuple[float, float]:
    """Mean and sample standard deviation over the finite values of a column.

    Either is NaN when it cannot be computed from the defined values.
    """
    defined = column[np.isfinite(column)]
    n = defined.size
    if n == 0:
        return float("nan"), float("nan")
    mean = float(defined.mean())
    if n - 1 <= 0:
        return mean, float("nan")
    if np.all(defined == defined[0]):
        return mean, 0.0
    return mean, float(defined.std(ddof=1))


class Standardizer:
    """
    Rewrites every feature of a corpus as a z-score across documents.

    Only meaningful over a population of documents; single-document vectors
    are never passed through here. Undefined values stay undefined and are
    left out of the statistics. A feature with no spread (or fewer than two
    defined values) becomes undefined for every document.
    """

    def fit(self, dataset: CorpusDataset) -> Dict[str, Tuple[float, float]]:
        if len(dataset) == 0:
            raise EmptyCorpusError()
        X = dataset.matrix()
        return {
            name: column_statistics(X[:, j]) for j, name in enumerate(dataset.schema)
        }

    def standardize(self, dataset: CorpusDataset) -> CorpusDataset:
        stats = self.fit(dataset)
        logger.info(
            f"Computing standardized values for each feature over the whole corpus "
            f"({len(dataset)} files)"
        )
        constant = [name for name, (_, sd) in stats.items() if not sd or np.isnan(sd)]
        if constant:
            logger.debug(f"Features without variance, left undefined: {constant}")

        standardized = CorpusDataset(schema=dataset.schema)
        for document_id, vector in dataset.items():
            z: FeatureVector = {}
            for name, value in vector.items():
                mean, sd = stats[name]
                if not sd or np.isnan(sd) or not np.isfinite(value):
                    z[name] = float("nan")
                else:
                    z[name] = (value - mean) / sd
            standardized.add(document_id, z)
        return standardized
