# scorer.py
"""Statistical scorer for parse nodes.

Each node is described by a sparse bag of rule features (its own rule and
its rule together with its children's rules). A logistic regression trained
on an example corpus estimates the probability that a node belongs to a
correct parse; a node's probalog is its own log-probability plus the
probalogs of its children, so larger trees pay for every decision they make.

Models are trained with `train(...)`, or persisted/loaded as a pickled
payload dict with `save_model` / `load_model`. Both routes produce the same
`Model`, so the rest of the pipeline cannot tell them apart.
"""
from __future__ import annotations

import hashlib
import logging
import os
import pickle
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
from sklearn.feature_extraction import DictVectorizer
from sklearn.exceptions import NotFittedError
from sklearn.linear_model import LogisticRegression
from sklearn.utils.validation import check_is_fitted

from corpus import TRAINING_CONTEXT, Example
from errors import CoercionError, ModelError, ResolutionError
from moment import ResolverContext
from output import OutputKind
from resolver import resolve_value
from rules import ParsedNode, RuleSet
from tagger import ScoredCandidate

logger = logging.getLogger(__name__)

_PAYLOAD_KEYS = ("vectorizer", "sklearn_lr", "lang", "feature_fingerprint")


class FeatureExtractor:
    """Sparse features of a parse node."""

    def features(self, node: ParsedNode) -> Dict[str, float]:
        feats = {f"rule:{node.rule_name}": 1.0}
        if node.children:
            kids = "+".join(c.rule_name for c in node.children)
            feats[f"rule:{node.rule_name}|{kids}"] = 1.0
        return feats


def rules_fingerprint(rule_set: RuleSet) -> str:
    """Stable hash of the rule names a model was trained against."""
    h = hashlib.sha1()
    for name in rule_set.rule_names():
        h.update(name.encode("utf-8"))
        h.update(b"\0")
    return h.hexdigest()[:16]


@dataclass
class Model:
    vectorizer: DictVectorizer
    classifier: LogisticRegression
    lang: str = ""
    feature_fingerprint: Optional[str] = None

    def log_proba(self, feature_dicts: Sequence[Dict[str, float]]) -> np.ndarray:
        """Log-probability of the positive class for each feature dict."""
        if not feature_dicts:
            return np.zeros(0, dtype=float)
        X = self.vectorizer.transform(list(feature_dicts))
        pos = list(self.classifier.classes_).index(1)
        return self.classifier.predict_log_proba(X)[:, pos]

    def export_payload(self) -> Dict[str, Any]:
        return {
            "vectorizer": self.vectorizer,
            "sklearn_lr": self.classifier,
            "lang": self.lang,
            "feature_fingerprint": self.feature_fingerprint,
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Model":
        if not isinstance(payload, dict):
            raise ModelError(f"Model payload must be a dict, got {type(payload).__name__}")
        missing = [k for k in _PAYLOAD_KEYS if k not in payload]
        if missing:
            raise ModelError(f"Model payload is missing keys: {missing}")
        if not isinstance(payload["vectorizer"], DictVectorizer) or \
                not isinstance(payload["sklearn_lr"], LogisticRegression):
            raise ModelError("Model payload does not hold a vectorizer and a logistic regression")
        try:
            check_is_fitted(payload["vectorizer"], "vocabulary_")
            check_is_fitted(payload["sklearn_lr"])
        except NotFittedError as e:
            raise ModelError(f"Model payload holds an unfitted estimator: {e}") from e
        if 1 not in list(payload["sklearn_lr"].classes_):
            raise ModelError("Model classifier was not trained with a positive class")
        return cls(
            vectorizer=payload["vectorizer"],
            classifier=payload["sklearn_lr"],
            lang=str(payload["lang"]),
            feature_fingerprint=payload.get("feature_fingerprint"),
        )


def save_model(model: Model, path: str) -> str:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        pickle.dump(model.export_payload(), f)
    logger.info("Saved %s model to %s", model.lang or "?", path)
    return path


def load_model(path: str, lang: Optional[str] = None) -> Model:
    if not os.path.isfile(path):
        raise ModelError(f"Model file not found: {path}")
    try:
        with open(path, "rb") as f:
            payload = pickle.load(f)
    except Exception as e:
        raise ModelError(f"Malformed model file {path}: {e}") from e
    model = Model.from_payload(payload)
    if lang is not None and model.lang and model.lang.upper() != lang.upper():
        raise ModelError(f"Model {path} was trained for {model.lang}, not {lang}")
    return model


# ---- training ---------------------------------------------------------------

def _mark_subtree(node: ParsedNode, into: set) -> None:
    into.add(id(node))
    for c in node.children:
        _mark_subtree(c, into)


def _positive_nodes(text: str, forest: List[ParsedNode], example: Example,
                    context: ResolverContext) -> set:
    positive: set = set()
    for node in forest:
        if node.range.start != 0 or node.range.end != len(text):
            continue
        kind = OutputKind.for_dimension(node.dim)
        if kind is None:
            continue
        try:
            out = resolve_value(kind, node.value, context)
        except (CoercionError, ResolutionError):
            continue
        if example.check(out):
            _mark_subtree(node, positive)
    return positive


def train(
    rule_set: RuleSet,
    examples: Sequence[Example],
    extractor: Optional[FeatureExtractor] = None,
    C: float = 1.0,
    context: ResolverContext = TRAINING_CONTEXT,
    lang: str = "",
) -> Model:
    """Fit a node classifier from a corpus.

    Every node of a full-span parse that resolves to the expected output is a
    positive example; every other node built over the same text is negative.
    """
    extractor = extractor or FeatureExtractor()
    rows: List[Dict[str, float]] = []
    labels: List[int] = []
    for ex in examples:
        for text in ex.texts:
            forest = rule_set.apply(text)
            positive = _positive_nodes(text, forest, ex, context)
            if not positive:
                logger.warning("train: no parse of %r matches its expected value", text)
            for node in forest:
                rows.append(extractor.features(node))
                labels.append(1 if id(node) in positive else 0)

    if not rows or len(set(labels)) < 2:
        raise ModelError("Training corpus produced a single class; cannot fit the scorer")

    vectorizer = DictVectorizer()
    X = vectorizer.fit_transform(rows)
    y = np.array(labels, dtype=int)
    # balanced = robust to the heavy skew towards negative nodes
    clf = LogisticRegression(max_iter=1000, class_weight="balanced", C=C)
    clf.fit(X, y)
    logger.info("train: %d nodes (%d positive), %d features", len(y), int(y.sum()), len(vectorizer.feature_names_))
    return Model(vectorizer, clf, lang=lang, feature_fingerprint=rules_fingerprint(rule_set))


# ---- scoring ----------------------------------------------------------------

def score_forest(nodes: Sequence[ParsedNode], model: Model,
                 extractor: Optional[FeatureExtractor] = None) -> List[ScoredCandidate]:
    """Score every node; `nodes` must list children before their parents."""
    extractor = extractor or FeatureExtractor()
    own = model.log_proba([extractor.features(n) for n in nodes])
    probalogs: Dict[int, float] = {}
    out: List[ScoredCandidate] = []
    for node, lp in zip(nodes, own):
        total = float(lp) + sum(probalogs[id(c)] for c in node.children)
        probalogs[id(node)] = total
        out.append(ScoredCandidate(node, total))
    return out
