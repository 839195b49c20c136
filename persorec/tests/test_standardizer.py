import math

import numpy as np
import pytest

NAN = float("nan")


def make_dataset():
    from persorec.standardizer import CorpusDataset

    return CorpusDataset(
        {
            "a.txt": {"X": 1.0, "Y": 5.0, "Z": NAN},
            "b.txt": {"X": 3.0, "Y": 5.0, "Z": 2.0},
            "c.txt": {"X": 5.0, "Y": 5.0, "Z": 4.0},
        }
    )


class TestCorpusDataset:
    def test_schema_from_first_document(self):
        dataset = make_dataset()
        assert dataset.schema == ["X", "Y", "Z"]
        assert list(dataset) == ["a.txt", "b.txt", "c.txt"]
        assert dataset.matrix().shape == (3, 3)

    def test_missing_feature_rejected(self):
        from persorec.errors import SchemaMismatchError

        dataset = make_dataset()
        with pytest.raises(SchemaMismatchError) as exc:
            dataset.add("d.txt", {"X": 1.0, "Y": 1.0})
        assert exc.value.document_id == "d.txt"
        assert exc.value.missing == ["Z"]

    def test_reordered_features_rejected(self):
        from persorec.errors import SchemaMismatchError

        dataset = make_dataset()
        with pytest.raises(SchemaMismatchError, match="feature order differs"):
            dataset.add("d.txt", {"Z": 1.0, "Y": 1.0, "X": 1.0})

    def test_empty_dataset_matrix(self):
        from persorec.standardizer import CorpusDataset

        assert CorpusDataset(schema=["X"]).matrix().shape == (0, 1)


class TestColumnStatistics:
    def test_ignores_undefined_values(self):
        from persorec.standardizer import column_statistics

        mean, sd = column_statistics(np.array([NAN, 2.0, 4.0, np.inf]))
        assert mean == pytest.approx(3.0)
        assert sd == pytest.approx(math.sqrt(2))

    def test_single_value_has_no_deviation(self):
        from persorec.standardizer import column_statistics

        mean, sd = column_statistics(np.array([7.0]))
        assert mean == 7.0
        assert math.isnan(sd)

    def test_constant_column(self):
        from persorec.standardizer import column_statistics

        assert column_statistics(np.array([0.1, 0.1, 0.1])) == (pytest.approx(0.1), 0.0)


class TestStandardizer:
    def test_z_scores(self):
        from persorec.standardizer import Standardizer

        z = Standardizer().standardize(make_dataset())
        assert [z[d]["X"] for d in z] == [pytest.approx(-1.0), 0.0, pytest.approx(1.0)]

    def test_mean_zero_unit_deviation(self):
        from persorec.standardizer import CorpusDataset, Standardizer

        rng = np.random.default_rng(0)
        dataset = CorpusDataset(
            {f"doc{i}": {"A": float(v), "B": float(v) * 3 + 1} for i, v in enumerate(rng.normal(size=20))}
        )
        X = Standardizer().standardize(dataset).matrix()
        assert np.allclose(X.mean(axis=0), 0.0)
        assert np.allclose(X.std(axis=0, ddof=1), 1.0)

    def test_zero_variance_feature_undefined_everywhere(self):
        from persorec.standardizer import Standardizer

        z = Standardizer().standardize(make_dataset())
        assert all(math.isnan(z[d]["Y"]) for d in z)

    def test_undefined_values_stay_undefined(self):
        from persorec.standardizer import Standardizer

        z = Standardizer().standardize(make_dataset())
        assert math.isnan(z["a.txt"]["Z"])
        assert z["b.txt"]["Z"] == pytest.approx(-1 / math.sqrt(2))
        assert z["c.txt"]["Z"] == pytest.approx(1 / math.sqrt(2))

    def test_single_document_corpus(self):
        from persorec.standardizer import CorpusDataset, Standardizer

        z = Standardizer().standardize(CorpusDataset({"only": {"X": 4.0}}))
        assert math.isnan(z["only"]["X"])

    def test_schema_and_order_preserved(self):
        from persorec.standardizer import Standardizer

        dataset = make_dataset()
        z = Standardizer().standardize(dataset)
        assert z.schema == dataset.schema
        assert list(z) == list(dataset)
        assert dataset["a.txt"]["X"] == 1.0

    def test_empty_corpus_raises(self):
        from persorec.standardizer import CorpusDataset, Standardizer
        from persorec.errors import EmptyCorpusError

        with pytest.raises(EmptyCorpusError, match="Empty corpus"):
            Standardizer().standardize(CorpusDataset())
