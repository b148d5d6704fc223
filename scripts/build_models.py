#!/usr/bin/env python3
# scripts/build_models.py
"""
Train the scorer of one or more languages from their example corpora and
pickle the models where build_parser() looks for them.

python scripts/build_models.py                       # every registered language
python scripts/build_models.py --lang en --C 0.5 --models-dir models/
"""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from dotenv import load_dotenv

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from corpus import TRAINING_CONTEXT
from grammar import REGISTRY
from ontology import Parser, train_raw_parser
from scorer import save_model
from shared_config import DEFAULT_MODELS_DIR

_ = load_dotenv()
logger = logging.getLogger(__name__)


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    ap = argparse.ArgumentParser(description="Train and save scorer models")
    ap.add_argument("--lang", nargs="*", default=None,
                    help="Languages to build (default: all registered)")
    ap.add_argument("--models-dir", default=None,
                    help="Output directory (default: $ONTOLOGY_MODELS_DIR or ./models)")
    ap.add_argument("--C", type=float, default=1.0, help="Inverse regularization strength")
    ap.add_argument("--report", action="store_true",
                    help="Print corpus coverage of the freshly trained parser")
    args = ap.parse_args()

    models_dir = args.models_dir or os.environ.get("ONTOLOGY_MODELS_DIR") or DEFAULT_MODELS_DIR
    langs = args.lang or REGISTRY.languages()

    for lang in langs:
        raw = train_raw_parser(lang, REGISTRY, C=args.C)
        path = REGISTRY.model_path(lang, models_dir)
        save_model(raw.model, path)
        logger.info("%s: %d rules, %d text patterns", lang.upper(), raw.num_rules(), raw.num_text_patterns())

        if args.report:
            texts = [t for ex in REGISTRY.examples(lang) for t in ex.texts]
            analysis = Parser(raw).analyse(texts, TRAINING_CONTEXT)
            print(json.dumps({lang.upper(): analysis.to_dict()}, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
