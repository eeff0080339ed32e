"""Command-line interface."""

from __future__ import annotations

import argparse
from contextlib import nullcontext
import json
from pathlib import Path
import sys
from typing import TYPE_CHECKING, TextIO

from . import __version__
from .config.models import SubjectStrategy
from .errors import Vcf2RdfError
from .rdf_generation.serializer import SUPPORTED_FORMATS

if TYPE_CHECKING:
    from .config.schemas import ConversionConfig


def _add_logging_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable DEBUG level logging",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument("--log-file", type=str, help="Also write logs to this file")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="vcf2rdf",
        description="Convert VCF variant calls to RDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  vcf2rdf convert -c config.yaml input.vcf.gz > output.nt
  vcf2rdf convert --subject normalized-location -c config.yaml -f turtle input.vcf
  vcf2rdf stat --count input.vcf.gz
  vcf2rdf generate-config --assembly GRCh38 input.vcf.gz > config.yaml
        """,
    )

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    convert_parser = subparsers.add_parser("convert", help="Convert a VCF file to RDF")
    convert_parser.add_argument("input", type=str, help="VCF file to convert")
    convert_parser.add_argument("--config", "-c", type=str, help="Configuration file path")
    convert_parser.add_argument(
        "--subject",
        choices=[strategy.value for strategy in SubjectStrategy],
        help="How subjects are generated (default: blank-node)",
    )
    convert_parser.add_argument(
        "--no-normalize",
        action="store_true",
        help="Use raw positions and alleles instead of normalized FALDO locations",
    )
    convert_parser.add_argument(
        "--best-effort",
        action="store_true",
        help="Skip malformed records instead of aborting",
    )
    convert_parser.add_argument(
        "--rehearsal",
        action="store_true",
        help="Convert only the first record",
    )
    convert_parser.add_argument(
        "--format",
        "-f",
        default="nt",
        choices=sorted(SUPPORTED_FORMATS),
        help="Output format (default: nt, streamed)",
    )
    convert_parser.add_argument(
        "--output", "-o", type=str, help="Output file (default: standard output)"
    )
    convert_parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar on standard error",
    )
    _add_input_type_argument(convert_parser)
    _add_logging_arguments(convert_parser)

    stat_parser = subparsers.add_parser("stat", help="Print statistics of a VCF file")
    stat_parser.add_argument("input", type=str, help="VCF file to inspect")
    stat_parser.add_argument(
        "--count", action="store_true", help="Only print the number of records"
    )
    stat_parser.add_argument(
        "--best-effort",
        action="store_true",
        help="Skip malformed records instead of aborting",
    )
    _add_input_type_argument(stat_parser)
    _add_logging_arguments(stat_parser)

    generate_parser = subparsers.add_parser(
        "generate-config", help="Print a configuration template for a VCF file"
    )
    generate_parser.add_argument("input", type=str, help="VCF file to inspect")
    generate_parser.add_argument(
        "--assembly", type=str, help="Reference assembly, e.g. GRCh38"
    )
    _add_input_type_argument(generate_parser)
    _add_logging_arguments(generate_parser)

    return parser


def _add_input_type_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--input-type",
        choices=["auto", "tabix", "text"],
        default="auto",
        help="How to read the input (default: text for .vcf, tabix otherwise)",
    )


def _setup_logging(config: "ConversionConfig", args: argparse.Namespace) -> None:
    from .utils.logging import (
        configure_external_loggers,
        level_for_verbosity,
        setup_logging,
    )

    if args.debug or args.verbose:
        config.logging.level = level_for_verbosity(args.verbose, args.debug)
    if args.log_file:
        config.logging.file_path = args.log_file

    setup_logging(config.logging)
    configure_external_loggers()


def _load(args: argparse.Namespace) -> "ConversionConfig":
    from .config import load_config, parse_config

    document = load_config(args.config) if getattr(args, "config", None) else None
    config = parse_config(document)
    _setup_logging(config, args)
    return config


def _open_output(output: str | None) -> TextIO | nullcontext[TextIO]:
    if not output:
        return nullcontext(sys.stdout)
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    return open(path, "w", encoding="utf-8")


def run_convert(args: argparse.Namespace) -> int:
    """Convert a VCF file."""
    from .pipeline import convert, open_run
    from .rdf_generation.serializer import create_sink

    overrides: dict[str, object] = {}
    if args.subject:
        overrides["subject"] = args.subject
    if args.no_normalize:
        overrides["normalize"] = False
    if args.best_effort:
        overrides["best_effort"] = True

    try:
        config = _load(args)
        run = open_run(
            args.input,
            config,
            input_type=args.input_type,
            rehearsal=args.rehearsal,
            progress=args.progress,
            **overrides,
        )
        with _open_output(args.output) as stream:
            sink = create_sink(args.format, stream, run.context.namespaces)
            convert(run, sink)
    except (Vcf2RdfError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def run_stat(args: argparse.Namespace) -> int:
    """Print record statistics."""
    from .pipeline import open_run, stream_stats

    try:
        config = _load(args)
        run = open_run(
            args.input,
            config,
            input_type=args.input_type,
            best_effort=True if args.best_effort else None,
        )
        report = stream_stats(run)
    except Vcf2RdfError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.count:
        print(report.records_seen)
    else:
        print(json.dumps(report.to_dict(), indent=2))
    return 0


def run_generate_config(args: argparse.Namespace) -> int:
    """Print a configuration template."""
    from .config import generate_config
    from .pipeline import create_provider
    from .processors.reader import RecordReader

    try:
        _load(args)
        reader = RecordReader(create_provider(args.input, args.input_type), args.input)
        template = generate_config(reader.header, args.assembly)
    except Vcf2RdfError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(template, end="")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    handlers = {
        "convert": run_convert,
        "stat": run_stat,
        "generate-config": run_generate_config,
    }

    handler = handlers.get(args.command)
    if handler:
        return handler(args)
    else:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
