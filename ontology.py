# ontology.py
"""Parser facade: text in, ordered typed matches out.

    from ontology import build_parser, train_parser
    from moment import ResolverContext
    from output import OutputKind

    parser = train_parser("en")            # or build_parser("en") with a saved model
    ctx = ResolverContext(timezone="Europe/Paris")
    for m in parser.parse("see you tomorrow at 3pm", ctx):
        print(m.char_range, m.value)

Pipeline: rules -> parse forest -> scorer (probalog per node) -> candidate
tagger (kind filter + overlap arbitration) -> resolver. Candidates that fail
to resolve are logged and dropped; the others are returned sorted by start.
"""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from errors import CoercionError, ResolutionError
from grammar import REGISTRY, LanguageRegistry
from moment import ResolverContext
from output import Output, OutputKind, output_to_dict
from resolver import resolve
from rules import ParsedNode, Range, RuleSet
from scorer import FeatureExtractor, Model, rules_fingerprint, score_forest, train
from tagger import Candidate, CandidateTagger, ScoredCandidate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParserMatch:
    byte_range: Range
    char_range: Range
    parsing_tree_height: int
    parsing_tree_num_nodes: int
    value: Output
    probalog: float
    latent: bool

    @property
    def kind(self) -> OutputKind:
        return self.value.kind

    def to_dict(self) -> Dict[str, Any]:
        return {
            "byte_range": list(self.byte_range.as_tuple()),
            "char_range": list(self.char_range.as_tuple()),
            "parsing_tree_height": self.parsing_tree_height,
            "parsing_tree_num_nodes": self.parsing_tree_num_nodes,
            "value": output_to_dict(self.value),
            "probalog": self.probalog,
            "latent": self.latent,
        }


# ---- analysis ---------------------------------------------------------------

@dataclass
class ExampleAnalysis:
    text: str
    matches: List[ParserMatch]

    @property
    def full_match(self) -> bool:
        """True when a single match covers the whole (stripped) text."""
        stripped = self.text.strip()
        if not stripped:
            return False
        lead = len(self.text) - len(self.text.lstrip())
        span = Range(lead, lead + len(stripped))
        return any(m.char_range.contains(span) for m in self.matches)


@dataclass
class ParsingAnalysis:
    examples: List[ExampleAnalysis] = field(default_factory=list)

    @property
    def coverage(self) -> float:
        if not self.examples:
            return 0.0
        return sum(e.full_match for e in self.examples) / len(self.examples)

    @property
    def failed(self) -> List[str]:
        return [e.text for e in self.examples if not e.full_match]

    def counts_by_kind(self) -> Dict[str, int]:
        c = Counter(m.kind.value for e in self.examples for m in e.matches)
        return dict(sorted(c.items()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_examples": len(self.examples),
            "coverage": self.coverage,
            "failed": self.failed,
            "counts_by_kind": self.counts_by_kind(),
        }


# ---- parsers ----------------------------------------------------------------

class RawParser:
    """Rules + scorer; the caller supplies the tagger for each call."""

    def __init__(self, rule_set: RuleSet, model: Model, feature_extractor: Optional[FeatureExtractor] = None):
        self.rule_set = rule_set
        self.model = model
        self.feature_extractor = feature_extractor or FeatureExtractor()

    def forest(self, text: str) -> List[ParsedNode]:
        return self.rule_set.apply(text)

    def scored_candidates(self, text: str) -> List[ScoredCandidate]:
        nodes = self.forest(text)
        logger.debug("parse: %d nodes for %r", len(nodes), text[:80])
        return score_forest(nodes, self.model, self.feature_extractor)

    def candidates(self, text: str, tagger: CandidateTagger) -> List[Candidate]:
        return tagger.tag(self.scored_candidates(text))

    def parse(self, text: str, tagger: CandidateTagger) -> List[ParserMatch]:
        if tagger.context is None:
            raise ValueError("CandidateTagger.context is required to resolve matches")
        priority = {k: i for i, k in enumerate(tagger.output_kind_filter)}
        matches = []
        for cand in self.candidates(text, tagger):
            try:
                value = resolve(cand, tagger.context)
            except (CoercionError, ResolutionError) as e:
                logger.warning("parse: dropping %s candidate %r: %s",
                               cand.kind.value, text[cand.node.range.start:cand.node.range.end], e)
                continue
            matches.append((priority.get(cand.kind, len(priority)), ParserMatch(
                byte_range=cand.node.byte_range,
                char_range=cand.node.range,
                parsing_tree_height=cand.node.height,
                parsing_tree_num_nodes=cand.node.num_nodes,
                value=value,
                probalog=cand.probalog,
                latent=cand.latent,
            )))
        matches.sort(key=lambda pm: (pm[1].byte_range.start, pm[0], -len(pm[1].byte_range)))
        return [m for _, m in matches]

    def analyse(self, examples: Sequence[str], tagger: CandidateTagger) -> ParsingAnalysis:
        return ParsingAnalysis([ExampleAnalysis(text, self.parse(text, tagger)) for text in examples])

    def num_rules(self) -> int:
        return self.rule_set.num_rules()

    def num_text_patterns(self) -> int:
        return self.rule_set.num_text_patterns()


class Parser:
    def __init__(self, raw: RawParser):
        self.raw = raw

    def parse(self, text: str, context: ResolverContext) -> List[ParserMatch]:
        return self.parse_with_kind_order(text, context, OutputKind.all())

    def parse_with_kind_order(self, text: str, context: ResolverContext,
                              order: Sequence[OutputKind]) -> List[ParserMatch]:
        tagger = CandidateTagger(list(order), context, resolve_all_candidates=False)
        return self.raw.parse(text, tagger)

    def candidates(self, text: str, context: ResolverContext,
                   order: Optional[Sequence[OutputKind]] = None) -> List[ParserMatch]:
        """Every resolvable candidate, overlapping alternatives included (marked latent)."""
        tagger = CandidateTagger(list(order or OutputKind.all()), context, resolve_all_candidates=True)
        return self.raw.parse(text, tagger)

    def analyse(self, examples: Sequence[str], context: ResolverContext) -> ParsingAnalysis:
        return self.analyse_with_kind_order(examples, context, OutputKind.all())

    def analyse_with_kind_order(self, examples: Sequence[str], context: ResolverContext,
                                order: Sequence[OutputKind]) -> ParsingAnalysis:
        tagger = CandidateTagger(list(order), context, resolve_all_candidates=False)
        return self.raw.analyse(examples, tagger)

    def num_rules(self) -> int:
        return self.raw.num_rules()

    def num_text_patterns(self) -> int:
        return self.raw.num_text_patterns()


# ---- construction -----------------------------------------------------------

def build_raw_parser(lang: str, models_dir: Optional[str] = None,
                     registry: LanguageRegistry = REGISTRY) -> RawParser:
    rule_set = registry.rules(lang)
    model = registry.scorer_model(lang, models_dir)
    if model.feature_fingerprint and model.feature_fingerprint != rules_fingerprint(rule_set):
        logger.warning("Model for %s was trained on a different rule set; consider retraining", lang)
    return RawParser(rule_set, model, FeatureExtractor())


def build_parser(lang: str, models_dir: Optional[str] = None,
                 registry: LanguageRegistry = REGISTRY) -> Parser:
    """Parser backed by the persisted model of `lang`."""
    return Parser(build_raw_parser(lang, models_dir, registry))


def train_raw_parser(lang: str, registry: LanguageRegistry = REGISTRY, C: float = 1.0) -> RawParser:
    rule_set = registry.rules(lang)
    extractor = FeatureExtractor()
    model = train(rule_set, registry.examples(lang), extractor, C=C, lang=registry.lookup(lang).lang)
    return RawParser(rule_set, model, extractor)


def train_parser(lang: str, registry: LanguageRegistry = REGISTRY, C: float = 1.0) -> Parser:
    """Parser whose scorer is trained in memory from the language's example corpus."""
    return Parser(train_raw_parser(lang, registry, C))
