import math
from typing import Mapping, Sequence

from rich.console import Console
from rich.table import Table

from ..models import DIMENSIONS, MODEL_FAMILIES, MODEL_TYPES, ScoreModel

SCALE_NOTE = (
    "Models are trained to output scores on a scale from 1 (low) to 7 (high), "
    "the scores might need to be normalized depending on the application domain."
)


def _fmt(value: float) -> str:
    if value is None or math.isnan(value):
        return "?"
    return f"{value:.3f}"


def print_features(console: Console, features: Mapping[str, float]) -> None:
    table = Table(title="Feature counts")
    table.add_column("Feature")
    table.add_column("Value", justify="right")
    for name, value in features.items():
        table.add_row(name, _fmt(value))
    console.print(table)


def _print_header(
    console: Console,
    models: Sequence[ScoreModel],
    family: str,
    model_type: str,
    print_models: bool,
) -> str:
    adj = MODEL_TYPES.get(model_type, "Observed")
    console.rule(f"Output of {MODEL_FAMILIES.get(family, family)}")
    if print_models:
        for model in models:
            console.print(f"{adj} {model.dimension.lower()} {model.estimator!r}", markup=False)
    return adj


def print_scores(
    console: Console,
    models: Sequence[ScoreModel],
    scores: Mapping[str, float],
    family: str,
    model_type: str = "obs",
    print_models: bool = False,
) -> None:
    adj = _print_header(console, models, family, model_type, print_models)
    table = Table(show_header=False, box=None)
    table.add_column("Dimension")
    table.add_column("Score", justify="right")
    for dimension, score in scores.items():
        table.add_row(f"{adj} {dimension.lower()} score:", _fmt(score))
    console.print(table)
    console.print(SCALE_NOTE)
    console.print(
        "Accuracy can be improved with models relative to your application "
        "domain, by running the corpus command on multiple files."
    )


def print_corpus_scores(
    console: Console,
    models: Sequence[ScoreModel],
    scores: Mapping[str, Mapping[str, float]],
    family: str,
    model_type: str = "obs",
    print_models: bool = False,
) -> None:
    adj = _print_header(console, models, family, model_type, print_models)
    table = Table(
        title=f"Estimates of {adj.lower()} personality for each file, "
        f"using standardized features"
    )
    table.add_column("File")
    dimensions = [m.dimension for m in models] or list(DIMENSIONS)
    for dimension in dimensions:
        table.add_column(dimension[:5], justify="right")
    for document_id, doc_scores in scores.items():
        table.add_row(document_id, *(_fmt(doc_scores.get(d)) for d in dimensions))
    console.print(table)
    for dimension in dimensions:
        console.print(f"{dimension[:5]} = {dimension}")
    console.print(SCALE_NOTE)
