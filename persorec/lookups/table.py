import csv
import logging
from pathlib import Path
from typing import Dict, Optional, Union

from ..errors import LookupConfigurationError
from .memory import InMemoryNormLookup

logger = logging.getLogger(__name__)

# MRC convention: 0 means the norm was not collected for the entry.
_UNDEFINED_CELLS = {"", "0"}


def _parse_value(raw: str, path: Path, line: int, column: str) -> Optional[float]:
    raw = raw.strip()
    if raw in _UNDEFINED_CELLS:
        return None
    try:
        return float(raw)
    except ValueError as e:
        raise LookupConfigurationError(
            f"{path}:{line}: invalid value {raw!r} for {column}"
        ) from e


class TabularNormLookup(InMemoryNormLookup):
    """
    Norm lookup loaded from a delimited text export of a norm database.

    The header row must start with ``word`` and ``pos`` columns; every other
    column is a norm (e.g. ``FAM``, ``CONC``). One row per word/tag entry.
    Empty cells and ``0`` are read as "not defined for this entry"; a norm
    column absent from the header is reported as not found.
    """

    name = "table"

    def __init__(self, path: Union[str, Path] = None, config: dict = None):
        config = dict(config or {})
        path = Path(path or config.get("path", ""))
        if not path.is_file():
            raise LookupConfigurationError(f"Norm database file {path} doesn't exist")
        delimiter = config.get("delimiter", "\t")
        entries = self._read(path, delimiter)
        super().__init__(entries, config)
        self.path = path
        logger.info(f"Norm database loaded ({len(self)} words) from {path}")

    @classmethod
    def is_available(cls) -> bool:
        return True

    @staticmethod
    def _read(path: Path, delimiter: str) -> Dict[str, Dict[str, Dict[str, Optional[float]]]]:
        entries: Dict[str, Dict[str, Dict[str, Optional[float]]]] = {}
        with open(path, "r", encoding="utf-8", newline="") as f:
            reader = csv.reader(f, delimiter=delimiter)
            header = next(reader, None)
            if not header or [h.strip().lower() for h in header[:2]] != ["word", "pos"]:
                raise LookupConfigurationError(
                    f"Norm database {path} must start with a 'word<TAB>pos' header"
                )
            norms = [h.strip().upper() for h in header[2:]]
            for line, row in enumerate(reader, start=2):
                if not row or not row[0].strip():
                    continue
                if len(row) < 2:
                    raise LookupConfigurationError(f"{path}:{line}: missing pos column")
                word, tag = row[0].strip().lower(), row[1].strip().upper()
                values = {
                    norm: _parse_value(cell, path, line, norm)
                    for norm, cell in zip(norms, row[2:])
                }
                # short rows leave trailing norms undefined
                for norm in norms[len(row) - 2:]:
                    values.setdefault(norm, None)
                entries.setdefault(word, {}).setdefault(tag, {}).update(values)
        return entries
