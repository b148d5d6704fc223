# tests/test_tagger.py
from dimension import Calendar, DatetimeValue, NumberValue, OrdinalValue, TimeGrainValue
from moment import Grain
from output import OutputKind
from rules import ParsedNode, Range
from tagger import CandidateTagger, ScoredCandidate

N, D, O = OutputKind.NUMBER, OutputKind.DATETIME, OutputKind.ORDINAL


# -------------------------
# Small helpers
# -------------------------
def _node(start, end, value, children=(), rule="r"):
    return ParsedNode(rule, Range(start, end), Range(start, end), value, tuple(children))


def _sc(start, end, value, probalog=-1.0, children=()):
    return ScoredCandidate(_node(start, end, value, children), probalog)


def _spans(cands):
    return [(c.node.range.start, c.node.range.end, c.kind) for c in cands]


def _tag(cands, order, exhaustive=False):
    return CandidateTagger(order, None, resolve_all_candidates=exhaustive).tag(cands)


def test_empty_forest_gives_empty_list():
    assert _tag([], OutputKind.all()) == []


def test_unmapped_and_unrequested_kinds_are_dropped():
    cands = [
        _sc(0, 3, TimeGrainValue(Grain.DAY)),
        _sc(4, 6, OrdinalValue(2)),
        _sc(7, 9, NumberValue(9)),
    ]
    out = _tag(cands, [N])
    assert _spans(out) == [(7, 9, N)]


def test_higher_priority_kind_blocks_contained_number():
    date = _sc(0, 11, DatetimeValue(Calendar(month=5, day=12)))
    num = _sc(4, 6, NumberValue(12), probalog=-0.01)
    assert _spans(_tag([num, date], [D, N])) == [(0, 11, D)]
    # reversing the order lets the number claim its span first
    assert _spans(_tag([num, date], [N, D])) == [(4, 6, N)]


def test_containment_is_dropped_even_in_exhaustive_mode():
    date = _sc(0, 11, DatetimeValue(Calendar(month=5, day=12)))
    num = _sc(4, 6, NumberValue(12))
    out = _tag([num, date], [D, N], exhaustive=True)
    assert _spans(out) == [(0, 11, D)]


def test_longest_span_wins_within_a_kind():
    twenty = _sc(0, 6, NumberValue(20), probalog=-0.1)
    one = _sc(7, 10, NumberValue(1), probalog=-0.1)
    both = _sc(0, 10, NumberValue(21), probalog=-2.0, children=(twenty.node, one.node))
    out = _tag([twenty, one, both], [N])
    assert len(out) == 1
    assert out[0].node.value.value == 21


def test_score_breaks_ties_between_equal_spans():
    a = _sc(0, 5, NumberValue(1), probalog=-3.0)
    b = _sc(0, 5, NumberValue(2), probalog=-0.5)
    (best,) = _tag([a, b], [N])
    assert best.node.value.value == 2


def test_simpler_tree_breaks_score_ties():
    leaf = _node(0, 2, NumberValue(1))
    deep = _sc(0, 5, NumberValue(1), probalog=-1.0, children=(leaf,))
    flat = _sc(0, 5, NumberValue(2), probalog=-1.0)
    (best,) = _tag([deep, flat], [N])
    assert best.node.value.value == 2


def test_best_only_results_never_overlap():
    cands = [
        _sc(0, 4, NumberValue(1)), _sc(2, 6, NumberValue(2)), _sc(5, 9, NumberValue(3)),
        _sc(8, 12, NumberValue(4)), _sc(0, 12, DatetimeValue(Calendar(year=2000)), probalog=-9.0),
    ]
    for order in ([N, D], [D, N]):
        out = _tag(cands, order)
        for i, a in enumerate(out):
            for b in out[i + 1:]:
                assert not a.byte_range.overlaps(b.byte_range)


def test_latent_nodes_only_in_exhaustive_mode():
    latent = _sc(0, 4, DatetimeValue(Calendar(year=2013), latent=True))
    assert _tag([latent], [D]) == []
    (kept,) = _tag([latent], [D], exhaustive=True)
    assert kept.latent


def test_exhaustive_keeps_overlapping_alternatives_as_latent():
    big = _sc(0, 10, NumberValue(21), probalog=-2.0)
    small = _sc(0, 6, NumberValue(20), probalog=-0.1)
    out = _tag([small, big], [N], exhaustive=True)
    assert [(c.node.value.value, c.tagged, c.latent) for c in out] == [(21, True, False), (20, False, True)]


def test_duplicate_kinds_in_order_are_ignored():
    out = _tag([_sc(0, 2, NumberValue(5))], [N, N, D, N])
    assert _spans(out) == [(0, 2, N)]
