import logging
from pathlib import Path
from typing import List, Union

import chardet

logger = logging.getLogger(__name__)

MIN_DETECTION_CONFIDENCE = 0.5


def decode_bytes(raw: bytes, source: str = "<bytes>") -> str:
    """Decode as UTF-8, repairing other encodings with chardet detection."""
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        pass

    detected = chardet.detect(raw)
    encoding = detected.get("encoding")
    if encoding and (detected.get("confidence") or 0) > MIN_DETECTION_CONFIDENCE:
        try:
            text = raw.decode(encoding)
            logger.info(f"Decoded {source} as {encoding}")
            return text
        except (LookupError, UnicodeDecodeError) as e:
            logger.debug(f"chardet guess {encoding} failed for {source}: {e}")

    logger.warning(f"Could not detect encoding of {source}, replacing invalid bytes")
    return raw.decode("utf-8", errors="replace")


def read_text(path: Union[str, Path]) -> str:
    path = Path(path)
    return decode_bytes(path.read_bytes(), source=str(path))


def collect_text_files(path: Union[str, Path]) -> List[Path]:
    """Regular, non-hidden files of a directory, sorted by name."""
    path = Path(path)
    if path.is_file():
        return [path]
    return sorted(
        (p for p in path.iterdir() if p.is_file() and not p.name.startswith(".")),
        key=lambda p: p.name,
    )
