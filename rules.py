# rules.py
"""A small saturating rule engine that produces the parse forest.

A `Rule` is a sequence of items; each item is either a `TextPattern` (a
regex matched against the raw text) or a `DimPredicate` (a test on the value
of an already-built node). Items are matched left to right; consecutive
items may be separated by whitespace and at most one comma. When every item
matches, the rule's production is called with one argument per item (the
regex match object, or the child node's value) and returns the new value,
or None to reject the combination.

`RuleSet.apply` runs all rules until no new node appears. Later rounds only
consider combinations that use at least one node created in the previous
round, so each combination is produced once.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple, Union

import regex as re

logger = logging.getLogger(__name__)

_GAP = re.compile(r"\s*(?:,\s*)?")

MAX_ROUNDS = 16
MAX_NODES = 4000


@dataclass(frozen=True)
class Range:
    """Half-open [start, end) range."""
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "Range") -> bool:
        return self.start < other.end and other.start < self.end

    def contains(self, other: "Range") -> bool:
        return self.start <= other.start and other.end <= self.end

    def as_tuple(self) -> Tuple[int, int]:
        return (self.start, self.end)


@dataclass(frozen=True, eq=False)
class ParsedNode:
    rule_name: str
    range: Range
    byte_range: Range
    value: Any
    children: Tuple["ParsedNode", ...] = ()

    @cached_property
    def height(self) -> int:
        return 1 + max((c.height for c in self.children), default=0)

    @cached_property
    def num_nodes(self) -> int:
        return 1 + sum(c.num_nodes for c in self.children)

    @cached_property
    def key(self) -> tuple:
        return (self.rule_name, self.range.start, self.range.end, tuple(c.key for c in self.children))

    @property
    def latent(self) -> bool:
        return bool(getattr(self.value, "latent", False))

    @property
    def dim(self):
        return self.value.dim


@dataclass(frozen=True)
class TextPattern:
    pattern: str
    flags: int = re.IGNORECASE

    @cached_property
    def regex(self):
        return re.compile(self.pattern, self.flags)


@dataclass(frozen=True)
class DimPredicate:
    func: Callable[[Any], bool]
    name: str = ""

    def accepts(self, value: Any) -> bool:
        return bool(self.func(value))


Item = Union[TextPattern, DimPredicate]


def pattern(p: str) -> TextPattern:
    return TextPattern(p)


def dim(value_type, test: Optional[Callable[[Any], bool]] = None, name: str = "") -> DimPredicate:
    """Predicate on a node value: an instance of `value_type` that passes `test`."""
    if test is None:
        return DimPredicate(lambda v: isinstance(v, value_type), name or value_type.__name__)
    return DimPredicate(lambda v: isinstance(v, value_type) and test(v), name or value_type.__name__)


@dataclass(frozen=True)
class Rule:
    name: str
    items: Tuple[Item, ...]
    production: Callable[..., Any]

    @property
    def is_lexical(self) -> bool:
        return all(isinstance(i, TextPattern) for i in self.items)


def _byte_offsets(text: str) -> List[int]:
    offsets = [0]
    total = 0
    for ch in text:
        total += len(ch.encode("utf-8"))
        offsets.append(total)
    return offsets


@dataclass
class RuleSet:
    rules: List[Rule] = field(default_factory=list)
    max_rounds: int = MAX_ROUNDS
    max_nodes: int = MAX_NODES

    def __post_init__(self):
        names = [r.name for r in self.rules]
        dupes = {n for n in names if names.count(n) > 1}
        if dupes:
            raise ValueError(f"Duplicate rule names: {sorted(dupes)}")

    def num_rules(self) -> int:
        return len(self.rules)

    def num_text_patterns(self) -> int:
        return len({
            item.pattern
            for rule in self.rules
            for item in rule.items
            if isinstance(item, TextPattern)
        })

    def rule_names(self) -> List[str]:
        return [r.name for r in self.rules]

    # ---- matching ---------------------------------------------------------

    def apply(self, text: str) -> List[ParsedNode]:
        """Return every node the rules can build over `text`, children before parents."""
        if not text:
            return []
        offsets = _byte_offsets(text)
        forest: List[ParsedNode] = []
        seen: Dict[tuple, ParsedNode] = {}
        fresh: set = set()

        for rnd in range(self.max_rounds):
            by_start: Dict[int, List[ParsedNode]] = defaultdict(list)
            for node in forest:
                by_start[node.range.start].append(node)
            snapshot = list(forest)

            created: List[ParsedNode] = []
            for rule in self.rules:
                if rnd > 0 and rule.is_lexical:
                    continue
                for start, end, value, children in self._matches(rule, text, snapshot, by_start):
                    if rnd > 0 and not any(id(c) in fresh for c in children):
                        continue
                    if end <= start or value is None:
                        continue
                    node = ParsedNode(
                        rule_name=rule.name,
                        range=Range(start, end),
                        byte_range=Range(offsets[start], offsets[end]),
                        value=value,
                        children=children,
                    )
                    if node.key in seen:
                        continue
                    seen[node.key] = node
                    created.append(node)

            if not created:
                logger.debug("rules: saturated after %d rounds, %d nodes", rnd, len(forest))
                break
            forest.extend(created)
            fresh = {id(n) for n in created}
            if len(forest) >= self.max_nodes:
                logger.warning("rules: node cap %d reached for %r; forest truncated", self.max_nodes, text[:80])
                break
        else:
            logger.warning("rules: no fixpoint after %d rounds for %r", self.max_rounds, text[:80])
        return forest

    def _matches(self, rule: Rule, text: str, nodes: Sequence[ParsedNode],
                 by_start: Dict[int, List[ParsedNode]]) -> Iterator[tuple]:
        first = rule.items[0]
        if isinstance(first, TextPattern):
            for m in first.regex.finditer(text):
                yield from self._extend(rule, 1, m.start(), m.end(), (m,), (), text, by_start)
        else:
            for node in nodes:
                if first.accepts(node.value):
                    yield from self._extend(rule, 1, node.range.start, node.range.end,
                                            (node.value,), (node,), text, by_start)

    def _extend(self, rule: Rule, idx: int, start: int, pos: int, args: tuple,
                children: tuple, text: str, by_start) -> Iterator[tuple]:
        if idx == len(rule.items):
            yield start, pos, rule.production(*args), children
            return
        at = _GAP.match(text, pos).end()
        item = rule.items[idx]
        if isinstance(item, TextPattern):
            m = item.regex.match(text, at)
            if m is not None:
                # an empty optional item does not eat the gap
                end = m.end() if m.end() > m.start() else pos
                yield from self._extend(rule, idx + 1, start, end, args + (m,), children, text, by_start)
            return
        for node in by_start.get(at, ()):
            if item.accepts(node.value):
                yield from self._extend(rule, idx + 1, start, node.range.end,
                                        args + (node.value,), children + (node,), text, by_start)
