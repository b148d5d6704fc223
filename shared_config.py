# shared_config.py
from __future__ import annotations
from dataclasses import dataclass, asdict, field
from typing import Dict, List, Optional
import argparse
import os

from moment import Grain, ResolverContext
from output import OutputKind

_ROOT = os.path.dirname(os.path.abspath(__file__))

# Where build_models.py writes and build_parser() reads pickled scorers.
DEFAULT_MODELS_DIR = os.environ.get("ONTOLOGY_MODELS_DIR", os.path.join(_ROOT, "models"))

ALL_KINDS = [k.value for k in OutputKind.all()]

# ---- Public API -----------------------------------------------------------------

def add_parser_flags(parser: argparse.ArgumentParser) -> None:
    """
    Attach a consistent set of flags to any argparse parser.
    Use this in CLIs that build a Parser and resolve text against a ResolverContext.
    """
    parser.add_argument("--lang", type=str, default="en",
                        help="Language identifier (case-insensitive), e.g. 'en'.")
    parser.add_argument("--models-dir", type=str, default=None,
                        help=f"Directory holding pickled scorer models (default: {DEFAULT_MODELS_DIR}).")
    parser.add_argument("--train", action="store_true",
                        help="Train the scorer from the language corpus instead of loading a model file.")

    # Output kinds, in priority order
    parser.add_argument("--kinds", nargs="*", default=None,
                        help=f"Output kinds in priority order (default: {' '.join(ALL_KINDS)}).")

    # Resolution context
    parser.add_argument("--timezone", type=str, default="UTC",
                        help="IANA time zone used to ground relative dates (e.g., 'Europe/Paris').")
    parser.add_argument("--reference-time", type=str, default=None,
                        help="ISO-8601 reference instant; defaults to now.")
    parser.add_argument("--default-grain", type=str, default="second",
                        choices=[g.label for g in Grain],
                        help="Grain reported for expressions without one (e.g. 'now').")
    parser.add_argument("--week-start", type=int, default=0,
                        help="First day of the week, 0 = Monday.")


def kinds_from_args(args: argparse.Namespace) -> List[OutputKind]:
    raw = getattr(args, "kinds", None)
    if not raw:
        return OutputKind.all()
    return [OutputKind.from_str(k) for k in raw]


def context_from_args(args: argparse.Namespace) -> ResolverContext:
    """Convert parsed args -> ResolverContext (ConfigurationError on bad zone/time)."""
    kw = dict(
        timezone=getattr(args, "timezone", None) or "UTC",
        default_grain=Grain.from_str(getattr(args, "default_grain", None) or "second"),
        week_start=int(getattr(args, "week_start", 0) or 0),
    )
    ref = getattr(args, "reference_time", None)
    if ref:
        kw["reference_time"] = ref
    return ResolverContext(**kw)


@dataclass
class ParserConfig:
    lang: str = "en"
    models_dir: Optional[str] = None
    train: bool = False
    kinds: List[str] = field(default_factory=lambda: list(ALL_KINDS))
    context: Dict[str, object] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def parser_config_from_args(args: argparse.Namespace) -> ParserConfig:
    return ParserConfig(
        lang=getattr(args, "lang", "en"),
        models_dir=getattr(args, "models_dir", None),
        train=bool(getattr(args, "train", False)),
        kinds=[k.value for k in kinds_from_args(args)],
        context=context_from_args(args).to_dict(),
    )
