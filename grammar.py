# grammar.py
"""Language registry: maps a language identifier to its rules, corpus and model.

Adding a language is a `REGISTRY.register(LanguageResources(...))` call; no
other module has to change.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import grammar_en
from corpus import Example
from errors import UnknownLanguageError
from output import OutputKind
from rules import RuleSet
from scorer import Model, load_model
from shared_config import DEFAULT_MODELS_DIR

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LanguageResources:
    lang: str
    rule_set: Callable[[], RuleSet]
    examples: Callable[[], List[Example]]
    dims: Callable[[], List[OutputKind]]
    model_file: str


class LanguageRegistry:
    def __init__(self):
        self._langs: Dict[str, LanguageResources] = {}

    @staticmethod
    def _key(lang: str) -> str:
        return str(lang).strip().upper()

    def register(self, resources: LanguageResources) -> None:
        key = self._key(resources.lang)
        if key in self._langs:
            logger.debug("registry: replacing resources for %s", key)
        self._langs[key] = resources

    def lookup(self, lang: str) -> LanguageResources:
        try:
            return self._langs[self._key(lang)]
        except KeyError:
            raise UnknownLanguageError(str(lang)) from None

    def languages(self) -> List[str]:
        return sorted(self._langs)

    def rules(self, lang: str) -> RuleSet:
        return self.lookup(lang).rule_set()

    def examples(self, lang: str) -> List[Example]:
        return self.lookup(lang).examples()

    def dims(self, lang: str) -> List[OutputKind]:
        return self.lookup(lang).dims()

    def model_path(self, lang: str, models_dir: Optional[str] = None) -> str:
        return os.path.join(models_dir or DEFAULT_MODELS_DIR, self.lookup(lang).model_file)

    def scorer_model(self, lang: str, models_dir: Optional[str] = None) -> Model:
        """Load the persisted scorer model for `lang` (ModelError if unusable)."""
        return load_model(self.model_path(lang, models_dir), lang=self._key(lang))


REGISTRY = LanguageRegistry()
REGISTRY.register(LanguageResources(
    lang="EN",
    rule_set=grammar_en.rule_set,
    examples=grammar_en.examples,
    dims=grammar_en.dims,
    model_file="en.pkl",
))


def languages() -> List[str]:
    return REGISTRY.languages()


def rules(lang: str) -> RuleSet:
    return REGISTRY.rules(lang)


def examples(lang: str) -> List[Example]:
    return REGISTRY.examples(lang)


def dims(lang: str) -> List[OutputKind]:
    return REGISTRY.dims(lang)


def scorer_model(lang: str, models_dir: Optional[str] = None) -> Model:
    return REGISTRY.scorer_model(lang, models_dir)
