class PersorecError(Exception):
    """Base class for all persorec errors."""


class ConfigurationError(PersorecError):
    """Fatal startup error: the engine cannot be constructed."""


class DictionaryLoadError(ConfigurationError):
    """The category-definition file is missing or has no categories."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Loading failed for category file {path}: {reason}")


class LookupConfigurationError(ConfigurationError):
    """The psycholinguistic norm database path is invalid or unreadable."""


class ModelLoadError(ConfigurationError):
    """A pretrained model file could not be found or unpickled."""


class CorpusError(PersorecError):
    """Base class for corpus-mode failures."""


class EmptyCorpusError(CorpusError):
    """Raised when standardization is requested over zero documents."""

    def __init__(self, source=None):
        self.source = source
        where = f" in {source}" if source is not None else ""
        super().__init__(f"Empty corpus: no documents to standardize{where}")


class SchemaMismatchError(CorpusError):
    """A document's feature names differ from the corpus schema."""

    def __init__(self, document_id, missing=(), unexpected=()):
        self.document_id = document_id
        self.missing = list(missing)
        self.unexpected = list(unexpected)
        detail = []
        if self.missing:
            detail.append(f"missing {self.missing}")
        if self.unexpected:
            detail.append(f"unexpected {self.unexpected}")
        if not detail:
            detail.append("feature order differs")
        super().__init__(
            f"Document {document_id} does not match the corpus schema: "
            + ", ".join(detail)
        )


class ExtractionTimeoutError(CorpusError):
    """Feature extraction for one document exceeded its deadline."""

    def __init__(self, document_id, timeout: float):
        self.document_id = document_id
        self.timeout = timeout
        super().__init__(
            f"Feature extraction for {document_id} exceeded {timeout:.1f}s"
        )
