import os
import logging
import time
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from rich.progress import Progress

from .analyzers.base import AnalyzedDocument
from .analyzers.dictionary import CategoryDictionary
from .analyzers.norms import NormLookupAggregator
from .analyzers.surface import SurfaceFeatureExtractor
from .analyzers.tokenizer import TextTokenizer
from .assembler import FeatureAssembler
from .config import require_path
from .errors import EmptyCorpusError, ExtractionTimeoutError, SchemaMismatchError
from .lookups import BaseNormLookup, get_lookup
from .models import ScoreModel, score_all
from .schema import FeatureNaming
from .standardizer import CorpusDataset, Standardizer
from .utils.textio import collect_text_files, read_text

logger = logging.getLogger(__name__)

# Upper bound, in seconds, between deadline checks in corpus mode.
POLL_INTERVAL = 0.05


class Pipeline:
    """
    Feature extraction pipeline.

    Stages:
      1. Tokenize: raw text to words and sentences
      2. Count   : dictionary categories and surface statistics
      3. Norms   : psycholinguistic norm averages from the lookup
      4. Assemble: canonical names, exclusions, one ordered vector

    In corpus mode every document of a directory goes through stages 1-4 in
    a thread pool, then all vectors are standardized together.

    Usage:
        p = Pipeline.from_config(load_config("persorec.yaml"))
        features = p.extract_features(text)
        dataset = p.standardized_corpus(Path("texts"))

    The dictionary and the lookup are shared read-only by all workers.
    """

    def __init__(
        self,
        dictionary: CategoryDictionary,
        lookup: BaseNormLookup,
        naming: Optional[FeatureNaming] = None,
        workers: Optional[int] = None,
        document_timeout: Optional[float] = None,
    ):
        self.dictionary = dictionary
        self.lookup = lookup
        self._tokenizer = TextTokenizer()
        self._surface = SurfaceFeatureExtractor()
        self._norms = NormLookupAggregator(lookup)
        self._assembler = FeatureAssembler(naming)
        self._standardizer = Standardizer()
        self.max_workers = workers or max(2, (os.cpu_count() or 2) // 2)
        self.document_timeout = document_timeout

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any]) -> "Pipeline":
        """Build the engine; configuration failures are fatal."""
        dictionary = CategoryDictionary.compile(require_path(cfg, "liwc_cat_file"))
        backend = cfg.get("norms_backend", "table")
        lookup_config: Dict[str, Any] = {"delimiter": cfg.get("norms_delimiter", "\t")}
        if backend == "table":
            lookup_config["path"] = str(require_path(cfg, "norms_path"))
        lookup = get_lookup(backend, lookup_config)
        return cls(
            dictionary,
            lookup,
            workers=cfg.get("workers"),
            document_timeout=cfg.get("document_timeout"),
        )

    def analyze_text(
        self, text: str, source_id: str = "<text>", relative_only: bool = True
    ) -> AnalyzedDocument:
        tokenized = self._tokenizer.tokenize(source_id, text)
        category_counts = self.dictionary.count_categories(tokenized.tokens)
        surface = self._surface.extract(tokenized)
        norms = self._norms.average_norms(tokenized.tokens)
        features = self._assembler.assemble(
            category_counts, surface, norms, relative_only=relative_only
        )
        logger.debug(f"Total features computed for {source_id}: {len(features)}")
        return AnalyzedDocument(tokenized=tokenized, features=features)

    def extract_features(self, text: str, relative_only: bool = True) -> Dict[str, float]:
        """Feature vector of a single text. Never standardized."""
        return self.analyze_text(text, relative_only=relative_only).features

    def analyze_file(
        self, path: Union[str, Path], relative_only: bool = True
    ) -> AnalyzedDocument:
        path = Path(path)
        return self.analyze_text(read_text(path), str(path.name), relative_only)

    def schema(self, relative_only: bool = False) -> List[str]:
        """Feature names, in order, that every document produces."""
        return list(self.extract_features("", relative_only=relative_only))

    def _extract_document(self, path: Path, progress=None, task_id=None) -> Dict[str, float]:
        try:
            logger.info(f"Computing features for file {path.name}...")
            return self.analyze_file(path, relative_only=False).features
        finally:
            if progress is not None and task_id is not None:
                progress.update(task_id, advance=1)

    def build_corpus(self, directory: Union[str, Path]) -> CorpusDataset:
        """
        Raw feature vectors for every text file of a directory.

        Documents that cannot be read, run longer than ``document_timeout``
        seconds from the moment their extraction starts, or do not produce the
        corpus schema are logged and left out. Documents still queued are
        never cancelled. A worker stuck on an expired document keeps its
        thread until it returns; the collector does not wait for it.
        """
        directory = Path(directory)
        files = collect_text_files(directory)
        if not files:
            raise EmptyCorpusError(directory)

        started: Dict[str, float] = {}
        vectors: Dict[str, Dict[str, float]] = {}

        with Progress(transient=True) as progress:
            task_id = progress.add_task(f"Processing {len(files)} texts", total=len(files))

            def run(path: Path) -> Dict[str, float]:
                started[path.name] = time.monotonic()
                return self._extract_document(path, progress, task_id)

            executor = ThreadPoolExecutor(max_workers=self.max_workers)
            try:
                futures = {executor.submit(run, path): path for path in files}
                pending = set(futures)
                while pending:
                    done, pending = wait(
                        pending, timeout=self._poll_interval(), return_when=FIRST_COMPLETED
                    )
                    for future in done:
                        path = futures[future]
                        try:
                            vectors[path.name] = future.result()
                        except OSError as e:
                            logger.error(f"Failed to read {path}: {e}")
                    for future in self._expired(pending, futures, started):
                        pending.discard(future)
                        path = futures[future]
                        logger.error(str(ExtractionTimeoutError(path.name, self.document_timeout)))
            finally:
                executor.shutdown(wait=False)

        # added in file order, so the dataset order is reproducible
        dataset = CorpusDataset(schema=self.schema(relative_only=False))
        for path in files:
            if path.name not in vectors:
                continue
            try:
                dataset.add(path.name, vectors[path.name])
            except SchemaMismatchError as e:
                logger.error(f"Rejected from corpus: {e}")

        if len(dataset) == 0:
            raise EmptyCorpusError(directory)
        logger.info(f"Extracted features for {len(dataset)}/{len(files)} files")
        return dataset

    def _poll_interval(self) -> Optional[float]:
        if self.document_timeout is None:
            return None
        return min(self.document_timeout, POLL_INTERVAL)

    def _expired(self, pending, futures, started: Dict[str, float]) -> List:
        """Running futures whose document has exceeded its deadline."""
        if self.document_timeout is None:
            return []
        now = time.monotonic()
        return [
            future
            for future in pending
            if not future.done()
            and futures[future].name in started
            and now - started[futures[future].name] > self.document_timeout
        ]

    def standardize(self, dataset: CorpusDataset) -> CorpusDataset:
        return self._standardizer.standardize(dataset)

    def standardized_corpus(self, directory: Union[str, Path]) -> CorpusDataset:
        return self.standardize(self.build_corpus(directory))

    def score_corpus(
        self, dataset: CorpusDataset, models: Sequence[ScoreModel]
    ) -> Dict[str, Dict[str, float]]:
        """Scores of every model for every document, in dataset order."""
        return {
            document_id: score_all(models, vector) for document_id, vector in dataset.items()
        }
