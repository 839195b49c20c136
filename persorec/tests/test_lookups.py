import pytest
from pathlib import Path

NORMS_TABLE = (
    "word\tpos\tFAM\tCONC\tIMAG\n"
    "dog\tnoun\t500\t0\t610\n"
    "Dog\tverb\t100\t\t\n"
    "quickly\tadverb\t420\n"
)


def make_table(tmp_path: Path, text: str = NORMS_TABLE, name: str = "mrc.tsv") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


class TestLookupResult:
    def test_constructors(self):
        from persorec.lookups import LookupOutcome, LookupResult

        assert LookupResult.ok(3).value == 3.0
        assert LookupResult.ok(3).is_ok
        assert LookupResult.not_applicable().outcome is LookupOutcome.NOT_APPLICABLE
        assert not LookupResult.not_found().is_ok


class TestInMemoryNormLookup:
    def test_words_case_insensitive_tags_upper(self):
        from persorec.lookups import InMemoryNormLookup

        lookup = InMemoryNormLookup({"Dog": {"noun": {"FAM": 500.0}}})
        assert lookup.contains("DOG")
        assert lookup.available_tags("dog") == {"NOUN"}
        assert lookup.fetch("dog", "noun", "FAM").value == 500.0

    def test_three_outcomes(self):
        from persorec.lookups import InMemoryNormLookup, LookupOutcome

        lookup = InMemoryNormLookup({"dog": {"NOUN": {"FAM": 500.0, "CONC": None}}})
        assert lookup.fetch("dog", "NOUN", "FAM").outcome is LookupOutcome.OK
        assert lookup.fetch("dog", "NOUN", "CONC").outcome is LookupOutcome.NOT_APPLICABLE
        assert lookup.fetch("dog", "NOUN", "IMAG").outcome is LookupOutcome.NOT_FOUND
        assert lookup.fetch("dog", "VERB", "FAM").outcome is LookupOutcome.NOT_FOUND
        assert lookup.fetch("cat", "NOUN", "FAM").outcome is LookupOutcome.NOT_FOUND

    def test_entries_from_config(self):
        from persorec.lookups import InMemoryNormLookup

        lookup = InMemoryNormLookup(config={"entries": {"cat": {"NOUN": {"FAM": 1.0}}}})
        assert len(lookup) == 1
        assert lookup.is_available()


class TestTabularNormLookup:
    def test_reads_entries_and_undefined_cells(self, tmp_path):
        from persorec.lookups import TabularNormLookup, LookupOutcome

        lookup = TabularNormLookup(make_table(tmp_path))
        assert len(lookup) == 2
        assert lookup.available_tags("dog") == {"NOUN", "VERB"}
        assert lookup.fetch("dog", "NOUN", "FAM").value == 500.0
        assert lookup.fetch("dog", "NOUN", "IMAG").value == 610.0
        assert lookup.fetch("dog", "NOUN", "CONC").outcome is LookupOutcome.NOT_APPLICABLE
        assert lookup.fetch("dog", "VERB", "CONC").outcome is LookupOutcome.NOT_APPLICABLE
        assert lookup.fetch("dog", "NOUN", "AOA").outcome is LookupOutcome.NOT_FOUND

    def test_short_row_leaves_norms_undefined(self, tmp_path):
        from persorec.lookups import TabularNormLookup, LookupOutcome

        lookup = TabularNormLookup(make_table(tmp_path))
        assert lookup.fetch("quickly", "ADVERB", "FAM").value == 420.0
        assert lookup.fetch("quickly", "ADVERB", "IMAG").outcome is LookupOutcome.NOT_APPLICABLE

    def test_custom_delimiter(self, tmp_path):
        from persorec.lookups import TabularNormLookup

        path = make_table(tmp_path, "word,pos,FAM\ncat,NOUN,300\n", "mrc.csv")
        lookup = TabularNormLookup(path, config={"delimiter": ","})
        assert lookup.fetch("cat", "NOUN", "FAM").value == 300.0

    def test_missing_file(self, tmp_path):
        from persorec.lookups import TabularNormLookup
        from persorec.errors import ConfigurationError, LookupConfigurationError

        with pytest.raises(LookupConfigurationError) as exc:
            TabularNormLookup(tmp_path / "nope.tsv")
        assert isinstance(exc.value, ConfigurationError)

    def test_bad_header(self, tmp_path):
        from persorec.lookups import TabularNormLookup
        from persorec.errors import LookupConfigurationError

        with pytest.raises(LookupConfigurationError):
            TabularNormLookup(make_table(tmp_path, "lemma\tFAM\ndog\t500\n"))

    def test_invalid_value(self, tmp_path):
        from persorec.lookups import TabularNormLookup
        from persorec.errors import LookupConfigurationError

        with pytest.raises(LookupConfigurationError, match="invalid value"):
            TabularNormLookup(make_table(tmp_path, "word\tpos\tFAM\ndog\tNOUN\tlots\n"))


class TestGetLookup:
    def test_memory_backend(self):
        from persorec.lookups import get_lookup, InMemoryNormLookup

        lookup = get_lookup("memory", {"entries": {"a": {"NOUN": {"FAM": 1.0}}}})
        assert isinstance(lookup, InMemoryNormLookup)
        assert lookup.contains("a")

    def test_table_backend(self, tmp_path):
        from persorec.lookups import get_lookup, TabularNormLookup

        lookup = get_lookup("Table", {"path": str(make_table(tmp_path))})
        assert isinstance(lookup, TabularNormLookup)

    def test_unknown_backend(self):
        from persorec.lookups import get_lookup

        with pytest.raises(ValueError, match="Unknown norm lookup backend"):
            get_lookup("wordnet")
