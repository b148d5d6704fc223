# tests/test_scorer.py
import pickle

import numpy as np
import pytest

from corpus import CheckInteger, Example
from errors import ModelError
from grammar import rules
from sklearn.feature_extraction import DictVectorizer
from sklearn.linear_model import LogisticRegression

from scorer import FeatureExtractor, Model, load_model, rules_fingerprint, save_model, score_forest, train


def _fitted_parts(labels):
    vec = DictVectorizer()
    X = vec.fit_transform([{"rule:a": 1.0}, {"rule:b": 1.0}])
    return vec, LogisticRegression().fit(X, labels)


def _tiny_model():
    examples = [
        Example(("twenty-one", "21"), CheckInteger(21)),
        Example(("three",), CheckInteger(3)),
    ]
    return train(rules("en"), examples, lang="EN")


def test_features_describe_rule_and_children():
    forest = rules("en").apply("twenty-one")
    feats = FeatureExtractor()
    top = [n for n in forest if n.rule_name == "number: sum"][0]
    f = feats.features(top)
    assert f["rule:number: sum"] == 1.0
    assert "rule:number: sum|number: tens+number: zero..nineteen" in f


def test_trained_model_scores_are_log_probabilities():
    model = _tiny_model()
    forest = rules("en").apply("twenty-one")
    lp = model.log_proba([FeatureExtractor().features(n) for n in forest])
    assert lp.shape == (len(forest),)
    assert np.all(lp <= 0.0)


def test_probalog_adds_children_scores():
    model = _tiny_model()
    forest = rules("en").apply("twenty-one")
    scored = score_forest(forest, model)
    by_node = {id(s.node): s.probalog for s in scored}
    own = model.log_proba([FeatureExtractor().features(n) for n in forest])
    for s, lp in zip(scored, own):
        expected = float(lp) + sum(by_node[id(c)] for c in s.node.children)
        assert s.probalog == pytest.approx(expected)


def test_training_needs_both_classes():
    with pytest.raises(ModelError):
        train(rules("en"), [Example(("qqq zzz",), CheckInteger(1))])


def test_save_and_load_give_the_same_scores(tmp_path):
    model = _tiny_model()
    path = save_model(model, str(tmp_path / "nested" / "en.pkl"))
    loaded = load_model(path, lang="en")
    assert loaded.lang == "EN"
    assert loaded.feature_fingerprint == rules_fingerprint(rules("en"))
    feats = [FeatureExtractor().features(n) for n in rules("en").apply("twenty-one")]
    assert np.allclose(model.log_proba(feats), loaded.log_proba(feats))


def test_missing_model_file(tmp_path):
    with pytest.raises(ModelError):
        load_model(str(tmp_path / "nope.pkl"))


def test_malformed_model_file(tmp_path):
    bad = tmp_path / "bad.pkl"
    bad.write_bytes(b"not a pickle at all")
    with pytest.raises(ModelError):
        load_model(str(bad))


@pytest.mark.parametrize("payload", [
    ["a", "list"],
    {"vectorizer": None},
    {"vectorizer": 1, "sklearn_lr": 2, "lang": "EN", "feature_fingerprint": None},
    {"vectorizer": DictVectorizer(), "sklearn_lr": LogisticRegression(), "lang": "EN", "feature_fingerprint": None},
    {"vectorizer": _fitted_parts([0, 1])[0], "sklearn_lr": LogisticRegression(), "lang": "EN",
     "feature_fingerprint": None},
    dict(zip(("vectorizer", "sklearn_lr"), _fitted_parts([0, 2])), lang="EN", feature_fingerprint=None),
])
def test_payload_validation(tmp_path, payload):
    path = tmp_path / "weird.pkl"
    with open(path, "wb") as f:
        pickle.dump(payload, f)
    with pytest.raises(ModelError):
        load_model(str(path))


def test_language_mismatch_is_rejected(tmp_path):
    model = _tiny_model()
    path = save_model(Model(model.vectorizer, model.classifier, lang="FR"), str(tmp_path / "fr.pkl"))
    with pytest.raises(ModelError):
        load_model(path, lang="EN")


class _BadReduce:
    # unpickles as int("a", "b", "c"), which raises TypeError
    def __reduce__(self):
        return (int, ("a", "b", "c"))


def test_unpickling_failure_of_any_kind_is_a_model_error(tmp_path):
    path = tmp_path / "typeerror.pkl"
    path.write_bytes(pickle.dumps(_BadReduce()))
    with pytest.raises(ModelError):
        load_model(str(path))


def test_corrupted_model_file_fails_at_build_time(tmp_path):
    from grammar import REGISTRY
    from ontology import build_parser

    model = _tiny_model()
    path = save_model(model, REGISTRY.model_path("en", str(tmp_path)))
    with open(path, "rb") as f:
        raw = f.read()
    for cut in (1, len(raw) // 3, len(raw) // 2, len(raw) - 1):
        with open(path, "wb") as f:
            f.write(raw[:cut])
        with pytest.raises(ModelError):
            build_parser("en", models_dir=str(tmp_path))
