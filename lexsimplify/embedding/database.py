"""
In-memory word database: embedding vectors plus the common-word vocabulary.

Two text formats are supported:
- vocabulary file: one token per line
- embedding file: ``token v1 v2 ... vN`` with commas and/or whitespace
  between fields

Malformed embedding lines are skipped and counted, never fatal.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional, Set, Tuple, Union

import numpy as np

from ..engine.errors import DataLoadError

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = re.compile(r"[,\s]+")


@dataclass
class LoadReport:
    """Outcome of loading one file."""
    path: str
    loaded: int = 0
    skipped: int = 0

    def to_dict(self) -> Dict[str, Union[str, int]]:
        return {"path": self.path, "loaded": self.loaded, "skipped": self.skipped}


def parse_embedding_line(line: str) -> Optional[Tuple[str, np.ndarray]]:
    """
    Parse one embedding row.

    Returns:
        (lowercase token, float64 vector), or None if the line is malformed
        (fewer than two fields or a non-numeric component)
    """
    parts = [part for part in FIELD_SEPARATOR.split(line.strip()) if part]
    if len(parts) < 2:
        return None

    try:
        vector = np.array([float(value) for value in parts[1:]], dtype=np.float64)
    except ValueError:
        return None

    return parts[0].lower(), vector


class WordDatabase:
    """
    Token -> vector table and common-word set.

    Populated by the loaders, read-only while text is being simplified.
    """

    def __init__(self,
                 vectors: Optional[Dict[str, Iterable[float]]] = None,
                 common_words: Optional[Iterable[str]] = None):
        self._vectors: Dict[str, np.ndarray] = {}
        self._common_words: Set[str] = set()

        for word, vector in (vectors or {}).items():
            self._vectors[word.lower()] = np.asarray(vector, dtype=np.float64)
        for word in common_words or ():
            self._common_words.add(word.strip().lower())

    # --- lookups used by the substitution engine ---

    def has_vector(self, token: str) -> bool:
        return token.lower() in self._vectors

    def get_vector(self, token: str) -> Optional[np.ndarray]:
        return self._vectors.get(token.lower())

    def is_common_word(self, token: str) -> bool:
        return token.lower() in self._common_words

    def all_vector_entries(self) -> Iterator[Tuple[str, np.ndarray]]:
        """Yield (token, vector) pairs in load order."""
        return iter(self._vectors.items())

    @property
    def common_words(self) -> Set[str]:
        return set(self._common_words)

    @property
    def vector_count(self) -> int:
        return len(self._vectors)

    @property
    def common_word_count(self) -> int:
        return len(self._common_words)

    @property
    def dimensions(self) -> Optional[int]:
        """Length of the first loaded vector, None when empty."""
        for vector in self._vectors.values():
            return int(vector.shape[0])
        return None

    def is_loaded(self) -> bool:
        """True once both vectors and common words are present."""
        return bool(self._vectors) and bool(self._common_words)

    def __len__(self) -> int:
        return len(self._vectors)

    def __contains__(self, token: str) -> bool:
        return self.has_vector(token)

    # --- loaders ---

    def load_common_words(self, file_path: Union[str, Path]) -> LoadReport:
        """
        Load a one-token-per-line vocabulary file.

        Tokens are trimmed and lowercased. Blank lines are ignored and not
        counted in the report, the same as in embedding files.

        Raises:
            DataLoadError: if the file cannot be read
        """
        path = Path(file_path)
        report = LoadReport(path=str(path))

        for line in self._read_lines(path):
            token = line.strip().lower()
            if not token:
                continue
            self._common_words.add(token)
            report.loaded += 1

        logger.info(f"Loaded {len(self._common_words)} common words from {path}")
        return report

    def load_embeddings(self, file_path: Union[str, Path]) -> LoadReport:
        """
        Load an embedding file.

        Rows with fewer than two fields or non-numeric components are
        skipped with a warning and counted; blank lines are ignored. A later
        row for the same token replaces the earlier one.

        Raises:
            DataLoadError: if the file cannot be read
        """
        path = Path(file_path)
        report = LoadReport(path=str(path))

        for line_number, line in enumerate(self._read_lines(path), start=1):
            if not line.strip():
                continue
            parsed = parse_embedding_line(line)
            if parsed is None:
                logger.warning(f"Skipping malformed line {line_number} in {path}: {line.strip()[:60]!r}")
                report.skipped += 1
                continue
            token, vector = parsed
            self._vectors[token] = vector
            report.loaded += 1

        logger.info(f"Loaded {len(self._vectors)} word embeddings from {path} ({report.skipped} skipped)")
        return report

    def clear(self) -> None:
        self._vectors.clear()
        self._common_words.clear()

    @staticmethod
    def _read_lines(path: Path) -> Iterator[str]:
        if not path.is_file():
            raise DataLoadError(f"File not found: {path}", path=str(path))
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                for line in f:
                    yield line
        except OSError as e:
            raise DataLoadError(f"Error reading {path}: {e}", path=str(path)) from e
