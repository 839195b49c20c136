import csv
import math
import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Union

from .schema import ATTRIBUTE_SCHEMA
from .standardizer import CorpusDataset

logger = logging.getLogger(__name__)

ID_COLUMN = "filename"


def attribute_columns(schema: Sequence[str]) -> List[str]:
    """Features the models know, in model attribute order.

    Categories outside the attribute schema (e.g. LINGUISTIC) are left out.
    """
    present = set(schema)
    return [name for name in ATTRIBUTE_SCHEMA if name in present]


def _format_value(value: Optional[float], missing: str) -> str:
    if value is None or math.isnan(value):
        return missing
    return repr(float(value))


def _arff_quote(name: str) -> str:
    if any(c in name for c in " ,'\"{}%\t"):
        escaped = name.replace("\\", "\\\\").replace("'", "\\'")
        return f"'{escaped}'"
    return name


def dataset_rows(
    dataset: CorpusDataset,
    scores: Optional[Mapping[str, Mapping[str, float]]] = None,
    columns: Optional[Sequence[str]] = None,
    missing: str = "",
) -> List[List[str]]:
    """Rows of identifier, features in column order, then attached scores."""
    columns = list(columns) if columns is not None else dataset.schema
    scores = scores or {}
    score_names = _score_names(scores)
    rows = []
    for document_id, vector in dataset.items():
        row = [str(document_id)]
        row.extend(_format_value(vector.get(name), missing) for name in columns)
        doc_scores = scores.get(document_id, {})
        row.extend(_format_value(doc_scores.get(name), missing) for name in score_names)
        rows.append(row)
    return rows


def _score_names(scores: Mapping[str, Mapping[str, float]]) -> List[str]:
    names: Dict[str, None] = {}
    for doc_scores in scores.values():
        for name in doc_scores:
            names.setdefault(name, None)
    return list(names)


def write_csv(
    path: Union[str, Path],
    dataset: CorpusDataset,
    scores: Optional[Mapping[str, Mapping[str, float]]] = None,
    columns: Optional[Sequence[str]] = None,
) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    columns = list(columns) if columns is not None else dataset.schema
    header = [ID_COLUMN] + columns + _score_names(scores or {})
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(header)
        writer.writerows(dataset_rows(dataset, scores, columns))
    logger.info(f"Features and scores written in CSV file {path}")
    return path


def write_arff(
    path: Union[str, Path],
    dataset: CorpusDataset,
    scores: Optional[Mapping[str, Mapping[str, float]]] = None,
    columns: Optional[Sequence[str]] = None,
    relation: str = "features",
) -> Path:
    """Write a Weka ARFF dataset so new models can be trained on the features."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    columns = list(columns) if columns is not None else dataset.schema
    score_names = _score_names(scores or {})

    lines = [f"@relation {_arff_quote(relation)}", ""]
    lines.append(f"@attribute {ID_COLUMN} string")
    for name in columns + score_names:
        lines.append(f"@attribute {_arff_quote(name)} numeric")
    lines.extend(["", "@data"])
    for row in dataset_rows(dataset, scores, columns, missing="?"):
        row[0] = _arff_quote(row[0]) if row[0] else "''"
        lines.append(",".join(row))

    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.info(f"Features and scores written in arff file {path}")
    return path
