# tagger.py
"""Candidate tagging: turn a scored parse forest into the set of nodes to resolve.

Selection is a priority-ordered greedy interval selection over byte ranges:

  * nodes whose dimension has no output kind in the requested order are dropped;
  * in best-only mode latent nodes are dropped as well;
  * kinds are processed in the requested order, and every range selected for a
    kind blocks overlapping (including contained) nodes of all later kinds;
  * within a kind, nodes are visited longest span first, then by score, then
    by structural simplicity (lower height, fewer nodes), and a node that
    overlaps an already-selected node of the same kind is either dropped
    (best-only) or kept as an untagged alternative (exhaustive).
"""
from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from moment import ResolverContext
from output import OutputKind
from rules import ParsedNode, Range

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredCandidate:
    node: ParsedNode
    probalog: float


@dataclass(frozen=True)
class Candidate:
    node: ParsedNode
    probalog: float
    kind: OutputKind
    tagged: bool = True

    @property
    def latent(self) -> bool:
        return self.node.latent or not self.tagged

    @property
    def byte_range(self) -> Range:
        return self.node.byte_range


def _rank(c: ScoredCandidate):
    """Longest span first, then score.

    Probalogs are summed over the tree and each term is <= 0, so a larger
    tree always scores lower than its own subtrees; ranking on score alone
    would prefer "twenty" over "twenty-one".
    """
    n = c.node
    return (-len(n.byte_range), -c.probalog, n.height, n.num_nodes, n.byte_range.start)


def _dedupe_kinds(order: Sequence[OutputKind]) -> List[OutputKind]:
    return list(OrderedDict.fromkeys(order))


@dataclass
class CandidateTagger:
    output_kind_filter: Sequence[OutputKind] = field(default_factory=OutputKind.all)
    context: Optional[ResolverContext] = None
    resolve_all_candidates: bool = False

    def tag(self, candidates: Sequence[ScoredCandidate]) -> List[Candidate]:
        order = _dedupe_kinds(self.output_kind_filter)
        groups: Dict[OutputKind, List[ScoredCandidate]] = {k: [] for k in order}
        for c in candidates:
            kind = OutputKind.for_dimension(c.node.dim)
            if kind is None or kind not in groups:
                continue
            if c.node.latent and not self.resolve_all_candidates:
                continue
            groups[kind].append(c)

        committed: List[Range] = []
        out: List[Candidate] = []
        for kind in order:
            selected: List[Range] = []
            for c in sorted(groups[kind], key=_rank):
                r = c.node.byte_range
                if any(r.overlaps(b) for b in committed):
                    continue
                if any(r.overlaps(s) for s in selected):
                    if self.resolve_all_candidates:
                        out.append(Candidate(c.node, c.probalog, kind, tagged=False))
                    continue
                selected.append(r)
                out.append(Candidate(c.node, c.probalog, kind, tagged=True))
            logger.debug("tagger: kind=%s kept=%d of %d", kind.value, len(selected), len(groups[kind]))
            committed.extend(selected)
        return out
