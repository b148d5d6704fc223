#!/usr/bin/env python3
"""
Parse free text into typed entities and print the matches as JSON.

Usage:
  python demo/run_parse.py "see you tomorrow at 3pm for twenty bucks"
  python demo/run_parse.py --train --timezone Europe/Paris "next friday"
  python demo/run_parse.py --kinds number datetime --all "twenty-one tomorrow"
  python demo/run_parse.py --analyse --input demo/sentences.txt

Optional:
  --all        Exhaustive mode: include overlapping alternatives (marked latent)
  --analyse    Treat each input line as an example and print a coverage report
  --pretty     Pretty-print the JSON

Notes:
- Without --train a model produced by scripts/build_models.py must exist.
- Reference time defaults to now in --timezone.
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Ensure the repo root (which contains ontology.py) is importable when running from demo/
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from errors import ConfigurationError
from ontology import build_parser, train_parser
from shared_config import add_parser_flags, context_from_args, kinds_from_args, parser_config_from_args

_ = load_dotenv()


def _read_lines(path: Path) -> list:
    try:
        with path.open("r", encoding="utf-8") as f:
            return [line.rstrip("\n") for line in f if line.strip()]
    except OSError as e:
        print(f"❌ Failed to read {path}: {e}", file=sys.stderr)
        sys.exit(1)


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    ap = argparse.ArgumentParser(description="Typed entity parser")
    ap.add_argument("text", nargs="*", help="Text to parse (joined with spaces)")
    ap.add_argument("--input", "-i", default=None, help="File with one example per line")
    ap.add_argument("--all", dest="exhaustive", action="store_true", help="Return overlapping alternatives too")
    ap.add_argument("--analyse", action="store_true", help="Print a coverage report instead of matches")
    ap.add_argument("--pretty", action="store_true", help="Pretty print JSON output")
    add_parser_flags(ap)
    args = ap.parse_args()

    try:
        cfg = parser_config_from_args(args)
        ctx = context_from_args(args)
        kinds = kinds_from_args(args)
        parser = train_parser(cfg.lang) if cfg.train else build_parser(cfg.lang, cfg.models_dir)
    except (ConfigurationError, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(2)

    texts = _read_lines(Path(args.input)) if args.input else [" ".join(args.text)]
    indent = 2 if args.pretty else None

    if args.analyse:
        report = parser.analyse_with_kind_order(texts, ctx, kinds).to_dict()
        report["config"] = cfg.to_dict()
        print(json.dumps(report, indent=indent, ensure_ascii=False))
        return

    for text in texts:
        if args.exhaustive:
            matches = parser.candidates(text, ctx, kinds)
        else:
            matches = parser.parse_with_kind_order(text, ctx, kinds)
        print(json.dumps({"text": text, "matches": [m.to_dict() for m in matches]},
                         indent=indent, ensure_ascii=False))


if __name__ == "__main__":
    main()
