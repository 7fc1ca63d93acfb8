"""Command-line interface for strangerstrings."""

from __future__ import annotations

import argparse
import csv
import datetime
import io
import json
import logging
import os
import sys
from pathlib import Path

import strangerstrings
from strangerstrings._utils import DEFAULT_MIN_LENGTH
from strangerstrings.analyzer import (
    AnalysisOptions,
    BinaryAnalysisOptions,
    StrangerStrings,
)
from strangerstrings.enums import EncodingKind
from strangerstrings.errors import InvalidInputError, StrangerStringsError
from strangerstrings.pipeline import StringAnalysisResult
from strangerstrings.pipeline.trigram import (
    MAX_NG_THRESHOLD,
    NG_THRESHOLDS,
    threshold_for_length,
)

logger = logging.getLogger("strangerstrings.cli")

_MODEL_ENV_VAR = "STRANGERSTRINGS_MODEL"
_DEFAULT_MODEL = "./StringModel.sng"

_SAMPLE_STRINGS: list[tuple[str, list[str]]] = [
    ("Valid English", ["hello", "world", "function", "initialize", "process"]),
    (
        "Valid Technical",
        ["file_inherit", "total %qu", "Error: %s", "main()", "sizeof"],
    ),
    ("Invalid Random", [".CRT$XIC", "Ta&@", "xZ#@$%", "!@#$%^&*", "}{][++"]),
    ("Edge Cases", ["ab", "a", "", "123", "XML"]),
]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="strangerstrings",
        description=(
            "Extract and analyze meaningful strings from binary files "
            "using trigram scoring."
        ),
    )
    parser.add_argument(
        "input", nargs="?", help='Input file to analyze, or "-" to read from stdin'
    )
    parser.add_argument(
        "-m",
        "--model",
        metavar="PATH",
        default=os.environ.get(_MODEL_ENV_VAR, _DEFAULT_MODEL),
        help=f"Path to .sng model file (default: ${_MODEL_ENV_VAR} or {_DEFAULT_MODEL})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show every string with its score, and a summary on stderr",
    )
    parser.add_argument(
        "-l",
        "--min-length",
        metavar="NUMBER",
        type=int,
        default=DEFAULT_MIN_LENGTH,
        help="Minimum string length for binary extraction",
    )
    parser.add_argument(
        "-u",
        "--unique",
        action="store_true",
        help="Show each unique string only once, with its best score",
    )
    parser.add_argument(
        "-s",
        "--sort",
        default="score",
        choices=["score", "alpha", "offset"],
        help="Sort results by score (default), alphabetically, or by file offset",
    )
    parser.add_argument(
        "-o", "--output", metavar="PATH", help="Output file (default: stdout)"
    )
    parser.add_argument(
        "-f",
        "--format",
        default="text",
        choices=["text", "json", "csv"],
        help="Output format",
    )
    parser.add_argument(
        "-e",
        "--encoding",
        action="append",
        dest="encodings",
        metavar="NAME",
        help=(
            "Encoding to extract strings with; repeat for several "
            f"({', '.join(str(e) for e in EncodingKind.all())}). Default: ASCII"
        ),
    )
    parser.add_argument(
        "--scripts",
        action="store_true",
        help="Score Han, Arabic and Cyrillic text with script-specific analyzers",
    )
    parser.add_argument(
        "--info", action="store_true", help="Show model information and exit"
    )
    parser.add_argument(
        "--test", action="store_true", help="Score built-in sample strings"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--version",
        action="version",
        version=f"strangerstrings {strangerstrings.__version__}",
    )
    return parser


def _load_analyzer(model_path: str) -> StrangerStrings:
    if not Path(model_path).is_file():
        msg = f"Model file not found: {model_path}"
        raise InvalidInputError(msg)
    analyzer = StrangerStrings()
    analyzer.load_model(AnalysisOptions(model_path=model_path))
    return analyzer


def _keep_best_per_string(
    results: list[StringAnalysisResult],
) -> list[StringAnalysisResult]:
    best: dict[str, StringAnalysisResult] = {}
    for result in results:
        seen = best.get(result.original_string)
        if seen is None or result.score > seen.score:
            best[result.original_string] = result
    return list(best.values())


def _sort_results(
    results: list[StringAnalysisResult], method: str, from_binary: bool
) -> list[StringAnalysisResult]:
    if method == "alpha":
        return sorted(results, key=lambda r: r.original_string)
    if method == "offset":
        if from_binary:
            return sorted(results, key=lambda r: r.offset or 0)
        print(
            "Warning: Offset sorting only available for binary files, "
            "sorting by score instead",
            file=sys.stderr,
        )
    return sorted(results, key=lambda r: r.score, reverse=True)


def _format_text(results: list[StringAnalysisResult], verbose: bool) -> str:
    if not verbose:
        return "".join(f"{r.original_string}\n" for r in results)

    has_offsets = any(r.offset is not None for r in results)
    lines = []
    if has_offsets:
        lines.append(f"{'String':<20} {'Score':<12} {'Threshold':<12} {'Offset':<10} Valid")
        lines.append("-" * 70)
    else:
        lines.append(f"{'String':<20} {'Score':<12} {'Threshold':<12} Valid")
        lines.append("-" * 60)
    for r in results:
        status = "✓" if r.is_valid else "✗"
        shown = f'"{r.original_string}"'
        if has_offsets:
            offset = "" if r.offset is None else f"0x{r.offset:X}"
            lines.append(
                f"{shown:<20} {r.score:<12.3f} {r.threshold:<12.3f} {offset:<10} {status}"
            )
        else:
            lines.append(f"{shown:<20} {r.score:<12.3f} {r.threshold:<12.3f} {status}")
    return "\n".join(lines) + "\n"


def _format_csv(results: list[StringAnalysisResult]) -> str:
    has_offsets = any(r.offset is not None for r in results)
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    header = ["string", "score", "threshold", "valid", "normalized"]
    if has_offsets:
        header.append("offset")
    writer.writerow(header)
    for r in results:
        row = [
            r.original_string,
            repr(r.score),
            repr(r.threshold),
            str(r.is_valid).lower(),
            r.normalized_string,
        ]
        if has_offsets:
            row.append("" if r.offset is None else str(r.offset))
        writer.writerow(row)
    return out.getvalue()


def format_results(
    results: list[StringAnalysisResult], fmt: str, verbose: bool = False
) -> str:
    """Render *results* as ``text``, ``json`` or ``csv``."""
    if fmt == "json":
        return json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False)
    if fmt == "csv":
        return _format_csv(results)
    return _format_text(results, verbose)


def _analyze_command(args: argparse.Namespace) -> None:
    if args.verbose:
        print(f"Loading model: {args.model}", file=sys.stderr)
    analyzer = _load_analyzer(args.model)
    if args.verbose:
        model_type, is_lowercase = analyzer.get_model_info()
        print(f"Model type: {model_type}, Lowercase: {is_lowercase}", file=sys.stderr)

    if args.input == "-":
        if args.verbose:
            print("Reading from stdin...", file=sys.stderr)
        words = sys.stdin.read().split()
        results = analyzer.analyze_strings(words, use_script_scoring=args.scripts)
        from_binary = False
    else:
        path = Path(args.input)
        if not path.is_file():
            msg = f"File not found: {args.input}"
            raise InvalidInputError(msg)
        if args.verbose:
            print(f"Analyzing file: {args.input}", file=sys.stderr)
        data = path.read_bytes()
        if args.verbose:
            count = len(analyzer.extract_strings_from_binary(data, args.min_length))
            print(
                f"Extracted {count} candidate strings (min length: {args.min_length})",
                file=sys.stderr,
            )
        results = analyzer.analyze_binary(
            data,
            BinaryAnalysisOptions(
                min_length=args.min_length,
                encodings=args.encodings,
                use_script_scoring=args.scripts,
            ),
        )
        from_binary = True

    shown = results if args.verbose else [r for r in results if r.is_valid]
    if args.unique:
        shown = _keep_best_per_string(shown)
    shown = _sort_results(shown, args.sort, from_binary)
    content = format_results(shown, args.format, args.verbose)

    if args.output:
        Path(args.output).write_text(content, encoding="utf-8")
        if args.verbose:
            print(f"Results written to: {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(content)

    if args.verbose:
        accepted = sum(1 for r in results if r.is_valid)
        rate = accepted / len(results) * 100.0 if results else 0.0
        unique_note = f" ({len(shown)} unique shown)" if args.unique else ""
        print("\nSummary:", file=sys.stderr)
        print(f"  Accepted: {accepted} strings", file=sys.stderr)
        print(f"  Rejected: {len(results) - accepted} strings", file=sys.stderr)
        print(f"  Total: {len(results)} strings", file=sys.stderr)
        print(f"  Acceptance rate: {rate:.1f}%{unique_note}", file=sys.stderr)


def _test_command(args: argparse.Namespace) -> None:
    analyzer = _load_analyzer(args.model)
    model_type, is_lowercase = analyzer.get_model_info()
    print("=== StrangerStrings Test Results ===\n")
    print(f"Model: {model_type} (lowercase: {is_lowercase})\n")
    for category, samples in _SAMPLE_STRINGS:
        print(f"{category}:")
        print("-" * (len(category) + 1))
        for sample in samples:
            result = analyzer.analyze_string(sample, use_script_scoring=args.scripts)
            status = "✓" if result.is_valid else "✗"
            if args.verbose:
                print(
                    f'  {status} "{sample}" → score: {result.score:.3f}, '
                    f"threshold: {result.threshold:.3f}"
                )
            else:
                print(f'  {status} "{sample}"')
        print()


def _info_command(args: argparse.Namespace) -> None:
    analyzer = _load_analyzer(args.model)
    model_type, is_lowercase = analyzer.get_model_info()
    stat = Path(args.model).stat()
    modified = datetime.datetime.fromtimestamp(stat.st_mtime, tz=datetime.timezone.utc)

    print("=== Model Information ===")
    print(f"File: {args.model}")
    print(f"Size: {stat.st_size / 1024:.1f} KB")
    print(f"Type: {model_type}")
    print(f"Lowercase: {is_lowercase}")
    print(f"Modified: {modified.isoformat()}")
    print("\n=== Threshold Information ===")
    print("Length-based thresholds:")
    for length in range(4, 21):
        print(f"  Length {length:2}: {threshold_for_length(length):.3f}")
    print(f"  Length 50+: {NG_THRESHOLDS[50]:.3f}")
    print(f"  Length 100+: {MAX_NG_THRESHOLD:.3f}")


def main(argv: list[str] | None = None) -> None:
    """Run the ``strangerstrings`` command-line tool.

    :param argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.min_length < 1:
        parser.error("--min-length must be a positive integer")

    try:
        if args.info:
            _info_command(args)
        elif args.test:
            _test_command(args)
        elif args.input is not None:
            _analyze_command(args)
        else:
            print(
                "Error: No input file specified. Use --help for usage information.",
                file=sys.stderr,
            )
            sys.exit(1)
    except (StrangerStringsError, OSError) as e:
        logger.error("Error: %s", e)  # noqa: TRY400
        sys.exit(1)


if __name__ == "__main__":
    main()
