import math

import pytest

from persorec.schema import NORM_NAMES, SURFACE_FEATURES

CATEGORY_FILE = (
    "\tPOSITIVE EMOTION\n"
    "\t\tgood (13)\n"
    "\t\tgreat* (13)\n"
    "\tNEGATIONS\n"
    "\t\tnot (1)\n"
    "\tFAMILY\n"
    "\t\tmother (4)\n"
    "\tNUMBERS\n"
    "\t\ttwo (2)\n"
)


def make_pipeline(category_file: str = CATEGORY_FILE, entries=None):
    from persorec.analyzers.dictionary import CategoryDictionary
    from persorec.lookups import InMemoryNormLookup
    from persorec.pipeline import Pipeline

    dictionary = CategoryDictionary.from_lines(category_file.splitlines())
    if entries is None:
        entries = {"good": {"ADJECTIVE": {norm: 2.0 for norm in NORM_NAMES}}}
    return Pipeline(dictionary, InMemoryNormLookup(entries), workers=2)


def same_values(a, b):
    return [repr(v) for v in a.values()] == [repr(v) for v in b.values()]


class TestFeatureAssembler:
    def test_feature_order(self):
        features = make_pipeline().extract_features("good news", relative_only=False)
        expected = list(SURFACE_FEATURES) + ["POSEMO", "NEGATE", "NUMBER", "DIC"]
        assert list(features) == expected + list(NORM_NAMES)

    def test_word_count_only_outside_relative_mode(self):
        p = make_pipeline()
        assert "WC" not in p.extract_features("good news")
        assert p.extract_features("good news", relative_only=False)["WC"] == 2.0

    def test_domain_dependent_categories_removed(self):
        features = make_pipeline().extract_features("my mother is good")
        assert "FAMILY" not in features
        # the word still counts towards dictionary coverage
        assert features["DIC"] == pytest.approx(50.0)

    def test_numbers_category_adds_numeric_tokens(self):
        features = make_pipeline().extract_features("two 2 good")
        assert features["NUMBER"] == pytest.approx(200 / 3)
        assert "NUMBERS" not in features

    def test_numbers_appended_without_category(self):
        features = make_pipeline("\tPOSITIVE\n\t\tgood (1)\n").extract_features("I have 2 cats")
        assert features["NUMBER"] == pytest.approx(25.0)
        names = list(features)
        assert names.index("NUMBER") == names.index("DIC") + 1

    def test_positive_category_percentage(self):
        p = make_pipeline("\tPOSITIVE\n\t\tgood (1)\n\t\tgreat* (1)\n")
        features = p.extract_features("this is good and great news")
        assert features["POSITIVE"] == pytest.approx(100 * 2 / 6)

    def test_canonicalize_is_idempotent(self):
        from persorec.assembler import FeatureAssembler

        assembler = FeatureAssembler()
        raw = {"NEGATIONS": 1.0, "POSITIVE EMOTION": 2.0, "CUSTOM": 3.0, "NUMBERS": 4.0}
        once = assembler.canonicalize(raw)
        assert once == {"NEGATE": 1.0, "POSEMO": 2.0, "CUSTOM": 3.0, "NUMBER": 4.0}
        assert assembler.canonicalize(once) == once

    def test_default_naming_is_shared_and_read_only(self):
        from persorec.schema import CATEGORY_SHORTCUTS, DOMAIN_DEPENDENT_FEATURES, FeatureNaming

        naming = FeatureNaming()
        assert naming.shortcuts is CATEGORY_SHORTCUTS
        assert naming.domain_dependent is DOMAIN_DEPENDENT_FEATURES
        assert naming.absolute == frozenset({"WC"})
        assert naming.canonical("NEGATIONS") == "NEGATE"
        with pytest.raises(TypeError):
            naming.shortcuts["NEGATIONS"] = "NOT"

    def test_custom_naming(self):
        from persorec.assembler import FeatureAssembler
        from persorec.schema import FeatureNaming

        assembler = FeatureAssembler(FeatureNaming.build({"A": "B"}, domain_dependent={"C"}))
        assert assembler.canonicalize({"A": 1.0, "C": 2.0}) == {"B": 1.0, "C": 2.0}
        assert assembler.naming.domain_dependent == frozenset({"C"})

    def test_norm_averages_appended(self):
        features = make_pipeline().extract_features("good good bad")
        assert features["FAM"] == pytest.approx(2.0)

    def test_empty_text_has_full_schema_and_no_infinities(self):
        p = make_pipeline()
        features = p.extract_features("", relative_only=False)
        assert list(features) == p.schema()
        assert features["WC"] == 0.0
        assert math.isnan(features["POSEMO"])
        assert math.isnan(features["DIC"])
        assert not any(math.isinf(v) for v in features.values())

    def test_extraction_is_deterministic(self):
        text = "This is not good. Great news, though! Is it 2 or two?"
        first = make_pipeline().extract_features(text)
        second = make_pipeline().extract_features(text)
        assert list(first) == list(second)
        assert same_values(first, second)

    def test_analyze_text_keeps_tokens(self):
        doc = make_pipeline().analyze_text("good news", source_id="note.txt")
        assert doc.tokenized.source_id == "note.txt"
        assert doc.tokenized.words == ["good", "news"]
        assert doc.features["POSEMO"] == pytest.approx(50.0)
