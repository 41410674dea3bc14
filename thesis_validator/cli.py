from __future__ import annotations
import argparse
import json
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path

from thesis_validator.adapters.languagetool_adapter import LanguageToolClient, LanguageToolConfig
from thesis_validator.config import default_config, load_config
from thesis_validator.errors import ThesisValidatorError
from thesis_validator.pipeline import ThesisValidator, build_response
from thesis_validator.report import write_json, write_txt
from thesis_validator.rules import default_rules


def _build_validator(args) -> ThesisValidator:
    lt_config = LanguageToolConfig(
        base_url=args.languagetool_url,
        timeout_s=args.languagetool_timeout,
        max_concurrent=args.grammar_workers,
    )
    client = LanguageToolClient(lt_config)
    return ThesisValidator(rules=default_rules(client, grammar_workers=lt_config.max_concurrent))


def main(argv=None):
    ap = argparse.ArgumentParser(
        prog="thesis-validate",
        description="Check a .docx thesis against a university formatting profile",
    )
    ap.add_argument("input_docx", nargs="?", help="Path to input .docx")
    ap.add_argument("--config", help="University profile (.yml); defaults to the bundled profile")
    ap.add_argument("--rules", default="", help="Comma-separated rule names to run (default: all)")
    ap.add_argument("--list-rules", action="store_true", help="Print available rule names and exit")
    ap.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    out_group = ap.add_argument_group("Output")
    out_group.add_argument(
        "--annotate",
        nargs="?",
        const="",
        default=None,
        help="Write a copy with review comments (default name: <stem>_annotated.docx)",
    )
    out_group.add_argument("--author", default="Thesis Validator", help="Comment author name")
    out_group.add_argument("--json-out", help="Write the full report as JSON")
    out_group.add_argument("--txt-out", help="Write the full report as text")

    lt_group = ap.add_argument_group("Grammar (LanguageTool)")
    lt_group.add_argument(
        "--languagetool-url",
        default=os.environ.get("LANGUAGETOOL_URL", "http://localhost:8081"),
        help="LanguageTool server base URL (or set LANGUAGETOOL_URL env var)",
    )
    lt_group.add_argument("--languagetool-timeout", type=float, default=30.0, help="Request timeout in seconds")
    lt_group.add_argument("--grammar-workers", type=int, default=4, help="Parallel grammar requests")
    lt_group.add_argument("--no-grammar", action="store_true", help="Skip the grammar check")

    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(message)s")

    validator = _build_validator(args)
    if args.list_rules:
        print("\n".join(validator.available_rules()))
        return 0

    if not args.input_docx:
        ap.error("input_docx is required (or use --list-rules)")
    input_path = Path(args.input_docx)
    if input_path.suffix.lower() != ".docx":
        ap.error("only .docx files are supported")

    try:
        config = load_config(args.config) if args.config else default_config()
        if args.no_grammar:
            config = replace(config, check_grammar=False)
        data = input_path.read_bytes()
        selected = [r for r in args.rules.split(",") if r.strip()]

        if args.annotate is not None:
            report = validator.validate_with_comments(data, config, selected, author=args.author)
            out_path = Path(args.annotate) if args.annotate else input_path.with_name(f"{input_path.stem}_annotated.docx")
            out_path.write_bytes(report.document_bytes)
        else:
            report = validator.validate(data, config, selected)
            out_path = None
    except (ThesisValidatorError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    payload = build_response(report, config, file_name=input_path.name, file_size=len(data))
    if args.json_out:
        write_json(args.json_out, payload)
    if args.txt_out:
        write_txt(args.txt_out, payload)

    output = {
        "file_name": payload["file_name"],
        "config_used": payload["config_used"],
        "is_valid": payload["is_valid"],
        "total_errors": payload["total_errors"],
        "total_warnings": payload["total_warnings"],
        "headings": len(payload["headings"]),
    }
    if out_path is not None:
        output["annotated_docx"] = str(out_path)
    print(json.dumps(output, indent=2))
    return 0 if payload["is_valid"] else 1


if __name__ == "__main__":
    sys.exit(main())
