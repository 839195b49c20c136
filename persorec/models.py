"""
Adapter between feature vectors and the pretrained personality models.

Models are pickled scikit-learn regressors, one per personality dimension,
stored as ``<models_dir>/<type>/<family>/[std-]<dimension>.pkl``. The
``std-`` variants were trained on corpus-standardized features and are the
ones to use in corpus mode.
"""
import pickle
import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Union

import numpy as np

from .errors import ModelLoadError
from .schema import ABSOLUTE_COUNT_FEATURES, ATTRIBUTE_SCHEMA

logger = logging.getLogger(__name__)

DIMENSIONS = (
    "Extraversion",
    "Emotional stability",
    "Agreeableness",
    "Conscientiousness",
    "Openness to experience",
)

DIMENSION_FILES = ("extra", "ems", "agree", "consc", "open")

# Model subdirectory -> display name, in command-line index order.
MODEL_FAMILIES = {
    "LinearRegression": "Linear Regression",
    "M5P": "M5' Model Tree",
    "M5P-R": "M5' Regression Tree",
    "SVM": "Support Vector Machine with Linear Kernel (SMOreg)",
}

MODEL_TYPES = {
    "obs": "Observed",
    "self": "Self-assessed",
}

DEFAULT_FAMILY = "SVM"


def family_by_index(index: int) -> str:
    """Model family for a 1-based command-line index."""
    families = list(MODEL_FAMILIES)
    if not 1 <= index <= len(families):
        raise ValueError(f"Invalid model index {index} (1 to {len(families)})")
    return families[index - 1]


class ScoreModel:
    """
    One pretrained regressor for one personality dimension.

    The feature vector is laid out in the model's attribute order. Features
    the model does not know are not sent; attributes the vector lacks, or
    holds as NaN, are passed as missing values. When no explicit attribute
    list is given, the estimator's ``feature_names_in_`` is used, else the
    default schema (without the word count when the vector has none).
    """

    def __init__(
        self,
        estimator,
        dimension: str,
        attributes: Optional[Sequence[str]] = None,
    ):
        self.estimator = estimator
        self.dimension = dimension
        if attributes is None and hasattr(estimator, "feature_names_in_"):
            attributes = [str(a) for a in estimator.feature_names_in_]
        self._attributes = list(attributes) if attributes is not None else None

    def attributes_for(self, vector: Mapping[str, float]) -> List[str]:
        if self._attributes is not None:
            return list(self._attributes)
        return [
            name
            for name in ATTRIBUTE_SCHEMA
            if name in vector or name not in ABSOLUTE_COUNT_FEATURES
        ]

    def row(self, vector: Mapping[str, float]) -> np.ndarray:
        values = []
        for name in self.attributes_for(vector):
            value = vector.get(name.upper())
            if value is None:
                logger.warning(f"No value for feature {name}, setting as missing value")
                values.append(np.nan)
            else:
                if np.isnan(value):
                    logger.debug(f"Attribute {name} missing")
                values.append(float(value))
        return np.array([values], dtype=float)

    def score(self, vector: Mapping[str, float]) -> float:
        return float(self.estimator.predict(self.row(vector))[0])

    def __str__(self) -> str:
        return f"{self.dimension}: {self.estimator!r}"


def model_path(
    models_dir: Union[str, Path],
    dimension_file: str,
    family: str = DEFAULT_FAMILY,
    model_type: str = "obs",
    standardized: bool = False,
) -> Path:
    prefix = "std-" if standardized else ""
    return Path(models_dir) / model_type / family / f"{prefix}{dimension_file}.pkl"


def load_models(
    models_dir: Union[str, Path],
    family: str = DEFAULT_FAMILY,
    model_type: str = "obs",
    standardized: bool = False,
) -> List[ScoreModel]:
    """Load one model per personality dimension."""
    if family not in MODEL_FAMILIES:
        raise ModelLoadError(
            f"Unknown model family {family}. Available: {list(MODEL_FAMILIES)}"
        )
    if model_type not in MODEL_TYPES:
        raise ModelLoadError(
            f"Unknown model type {model_type}. Available: {list(MODEL_TYPES)}"
        )

    models = []
    for dimension, filename in zip(DIMENSIONS, DIMENSION_FILES):
        path = model_path(models_dir, filename, family, model_type, standardized)
        logger.info(f"Loading model {path}...")
        try:
            with open(path, "rb") as f:
                estimator = pickle.load(f)
        except FileNotFoundError as e:
            raise ModelLoadError(f"Model file {path} doesn't exist") from e
        except (pickle.UnpicklingError, EOFError, AttributeError, ImportError) as e:
            raise ModelLoadError(f"Could not load model {path}: {e}") from e
        models.append(ScoreModel(estimator, dimension))
    return models


def save_model(estimator, path: Union[str, Path]) -> Path:
    """Pickle a fitted estimator where ``load_models`` will look for it."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        pickle.dump(estimator, f)
    return path


def score_all(models: Sequence[ScoreModel], vector: Mapping[str, float]) -> Dict[str, float]:
    return {model.dimension: model.score(vector) for model in models}
