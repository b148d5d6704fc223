# tests/test_ontology.py
import pendulum
import pytest

from corpus import TRAINING_CONTEXT
from errors import CoercionError, ModelError, ResolutionError, UnknownLanguageError
from grammar import REGISTRY
from moment import Grain, ResolverContext
from ontology import ParserMatch, build_parser
from output import DatetimeOutput, IntegerOutput, OutputKind
from resolver import resolve
from scorer import save_model
from tagger import CandidateTagger

N, D = OutputKind.NUMBER, OutputKind.DATETIME

CORPUS_TEXTS = [t for ex in REGISTRY.examples("en") for t in ex.texts]


# -------------------------
# Small helpers for asserts
# -------------------------
def _summary(matches):
    return [(m.char_range.as_tuple(), m.value) for m in matches]


def _assert_no_overlap(matches):
    for i, a in enumerate(matches):
        for b in matches[i + 1:]:
            assert not a.byte_range.overlaps(b.byte_range), (a, b)


def _only(matches) -> ParserMatch:
    assert len(matches) == 1, matches
    return matches[0]


# -------------------------
# End-to-end scenarios
# -------------------------
def test_twenty_one(en_parser, ctx):
    m = _only(en_parser.parse_with_kind_order("twenty-one", ctx, [N]))
    assert m.value == IntegerOutput(21)
    assert m.char_range.as_tuple() == (0, 10)
    assert m.byte_range.as_tuple() == (0, 10)
    assert not m.latent
    assert m.probalog <= 0.0
    assert m.parsing_tree_height == 2
    assert m.parsing_tree_num_nodes == 3


def test_long_number(en_parser, ctx):
    text = "one million five hundred twenty-one thousand eighty-two"
    m = _only(en_parser.parse_with_kind_order(text, ctx, [N]))
    assert m.value == IntegerOutput(1521082)
    assert m.char_range.as_tuple() == (0, len(text))


def test_adjacent_number_and_date(en_parser, ctx):
    matches = en_parser.parse_with_kind_order("twenty-one tomorrow", ctx, [N, D])
    assert len(matches) == 2
    num, day = matches
    assert num.value == IntegerOutput(21)
    assert num.char_range.as_tuple() == (0, 10)
    assert isinstance(day.value, DatetimeOutput)
    assert day.char_range.as_tuple() == (11, 19)
    assert day.value.moment == pendulum.datetime(2013, 2, 13, tz="UTC")
    assert day.value.grain == Grain.DAY


def test_day_number_inside_date_is_dropped(en_parser, ctx):
    m = _only(en_parser.parse_with_kind_order("may 12 2024", ctx, [D, N]))
    assert m.kind is D
    assert (m.value.moment.year, m.value.moment.month, m.value.moment.day) == (2024, 5, 12)


def test_number_first_keeps_numbers_instead(en_parser, ctx):
    matches = en_parser.parse_with_kind_order("may 12 2024", ctx, [N, D])
    assert {m.kind for m in matches} == {N}
    assert [m.value.value for m in matches] == [12, 2024]


def test_empty_text(en_parser, ctx):
    assert en_parser.parse("", ctx) == []
    assert en_parser.parse_with_kind_order("", ctx, [N]) == []


# -------------------------
# Datetime behaviour
# -------------------------
@pytest.mark.parametrize("text,expected,grain", [
    ("tomorrow", (2013, 2, 13, 0), Grain.DAY),
    ("next friday", (2013, 2, 15, 0), Grain.DAY),
    ("in three days", (2013, 2, 15, 0), Grain.DAY),
    ("friday the 12th of may", (2017, 5, 12, 0), Grain.DAY),
    ("tomorrow at 3pm", (2013, 2, 13, 15), Grain.HOUR),
])
def test_datetimes(en_parser, ctx, text, expected, grain):
    m = _only(en_parser.parse_with_kind_order(text, ctx, [D]))
    mo = m.value.moment
    assert (mo.year, mo.month, mo.day, mo.hour) == expected
    assert m.value.grain == grain


def test_inconsistent_weekday_is_dropped(en_parser, ctx):
    assert en_parser.parse_with_kind_order("friday the 12th of february 2013", ctx, [D]) == []


def test_failed_resolution_keeps_siblings(en_parser, ctx):
    text = "friday the 12th of february 2013 and twenty-one"
    matches = en_parser.parse_with_kind_order(text, ctx, [D, N])
    assert _summary(matches) == [((37, 47), IntegerOutput(21))]


def test_timezone_moves_today(en_parser):
    paris = ResolverContext(reference_time=pendulum.datetime(2013, 2, 12, 23, 30, tz="UTC"),
                            timezone="Europe/Paris")
    m = _only(en_parser.parse_with_kind_order("today", paris, [D]))
    assert (m.value.moment.month, m.value.moment.day) == (2, 13)


def test_default_order_prefers_marked_kinds(en_parser, ctx):
    kinds = [m.kind for m in en_parser.parse("it costs $20 and 12% more", ctx)]
    assert kinds == [OutputKind.AMOUNT_OF_MONEY, OutputKind.PERCENTAGE]


# -------------------------
# Properties over the corpus
# -------------------------
@pytest.mark.parametrize("text", CORPUS_TEXTS)
def test_corpus_properties(en_parser, text):
    matches = en_parser.parse(text, TRAINING_CONTEXT)
    _assert_no_overlap(matches)
    # idempotent
    assert _summary(en_parser.parse(text, TRAINING_CONTEXT)) == _summary(matches)
    # ordered by start
    starts = [m.byte_range.start for m in matches]
    assert starts == sorted(starts)
    for m in matches:
        assert not m.latent


@pytest.mark.parametrize("text", CORPUS_TEXTS)
def test_resolved_value_has_candidate_kind(en_raw, text):
    tagger = CandidateTagger(OutputKind.all(), TRAINING_CONTEXT, resolve_all_candidates=True)
    for c in en_raw.candidates(text, tagger):
        try:
            value = resolve(c, TRAINING_CONTEXT)
        except (CoercionError, ResolutionError):
            continue
        assert value.kind is c.kind, (text, c.node.rule_name)


@pytest.mark.parametrize("omitted", OutputKind.all())
def test_omitted_kind_never_returned(en_parser, omitted):
    order = [k for k in OutputKind.all() if k is not omitted]
    for text in CORPUS_TEXTS:
        assert all(m.kind is not omitted for m in en_parser.parse_with_kind_order(text, TRAINING_CONTEXT, order))


def test_priority_is_respected(en_raw):
    # a kept node may only overlap a higher-priority node that itself lost
    # to something of at least that priority
    order = OutputKind.all()
    rank = {k: i for i, k in enumerate(order)}
    tagger = CandidateTagger(order, TRAINING_CONTEXT)
    for text in CORPUS_TEXTS:
        scored = en_raw.scored_candidates(text)
        kept = tagger.tag(scored)
        for c in kept:
            for s in scored:
                k = OutputKind.for_dimension(s.node.dim)
                if k is None or k is c.kind or s.node.latent:
                    continue
                if s.node.byte_range.overlaps(c.byte_range) and rank[k] < rank[c.kind]:
                    assert any(rank[o.kind] <= rank[k] and o.byte_range.overlaps(s.node.byte_range)
                               for o in kept), (text, s.node.rule_name)


def test_corpus_is_mostly_understood(en_parser):
    analysis = en_parser.analyse(CORPUS_TEXTS, TRAINING_CONTEXT)
    assert analysis.coverage >= 0.9, analysis.failed


# -------------------------
# Exhaustive mode / analysis
# -------------------------
def test_candidates_include_latent_alternatives(en_parser, ctx):
    alts = en_parser.candidates("twenty-one", ctx, [N])
    tagged = [m for m in alts if not m.latent]
    assert [m.value for m in tagged] == [IntegerOutput(21)]
    assert {m.value.value for m in alts if m.latent} >= {20, 1}


def test_analyse(en_parser, ctx):
    report = en_parser.analyse(["twenty-one", "tomorrow", "xyz qqq"], ctx)
    assert report.coverage == pytest.approx(2 / 3)
    assert report.failed == ["xyz qqq"]
    d = report.to_dict()
    assert d["n_examples"] == 3
    assert d["counts_by_kind"] == {"Datetime": 1, "Number": 1}


def test_analyse_with_kind_order(en_parser, ctx):
    report = en_parser.analyse_with_kind_order(["may 12 2024"], ctx, [N])
    assert report.coverage == 0.0
    assert report.counts_by_kind() == {"Number": 2}


def test_match_to_dict(en_parser, ctx):
    d = _only(en_parser.parse_with_kind_order("tomorrow", ctx, [D])).to_dict()
    assert d["char_range"] == [0, 8]
    assert d["value"]["grain"] == "day"
    assert d["value"]["value"].startswith("2013-02-13T00:00:00")


def test_diagnostic_counts(en_parser, en_raw):
    assert en_parser.num_rules() == en_raw.rule_set.num_rules() > 0
    assert 0 < en_parser.num_text_patterns() <= en_parser.num_rules()


# -------------------------
# Construction paths
# -------------------------
def test_loaded_model_matches_trained_parser(tmp_path, en_parser, en_raw, ctx):
    save_model(en_raw.model, REGISTRY.model_path("en", str(tmp_path)))
    loaded = build_parser("EN", models_dir=str(tmp_path))
    for text in ["twenty-one tomorrow", "about $20 in 3 days", "from 3pm to 5pm", ""]:
        assert _summary(loaded.parse(text, ctx)) == _summary(en_parser.parse(text, ctx))
    assert loaded.num_rules() == en_parser.num_rules()


def test_missing_model_is_a_build_error(tmp_path):
    with pytest.raises(ModelError):
        build_parser("en", models_dir=str(tmp_path / "empty"))


def test_unknown_language_build_error():
    with pytest.raises(UnknownLanguageError):
        build_parser("xx")
