"""CLI entrypoints for elementscan commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List

from .analyzers import discover_analyzers
from .config import ConfigError, load_config
from .logging import configure_logging, get_logger
from .models import FileMeta, RepoManifest, Signal
from .repo_scanner import RepoScanner


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="elementscan",
        description="Extract component descriptors from Polymer-style JavaScript sources.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan_parser = subparsers.add_parser(
        "scan",
        help="Scan a file or directory and print the discovered elements as JSON.",
    )
    _add_verbose_option(scan_parser, suppress_default=True)
    scan_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="File or directory to scan (defaults to current directory).",
    )
    scan_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to .elementscan.yml (defaults to the scanned directory).",
    )
    scan_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the JSON report to this file instead of stdout.",
    )
    scan_parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for elementscan commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command != "scan":  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")

    target = Path(args.path).expanduser()
    try:
        config = load_config(args.config or (target if target.is_dir() else target.parent))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    configure_logging(
        verbose=bool(args.verbose), log_file=args.log_file, levels=config.log_levels
    )
    logger = get_logger("cli")

    try:
        if target.is_file():
            manifest = _single_file_manifest(target)
        else:
            manifest = RepoScanner().scan(
                str(target),
                exclude_paths=config.exclude_paths,
                extensions=config.extensions,
            )
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")

    signals: List[Signal] = []
    for analyzer in discover_analyzers(factory_name=config.factory_name):
        if analyzer.supports(manifest):
            signals.extend(analyzer.analyze(manifest))

    report = _build_report(manifest, signals)
    diagnostics = [signal for signal in signals if signal.name == "diagnostic"]
    logger.info(
        "Found %d elements in %d files",
        sum(len(entry["elements"]) for entry in report),
        len(manifest.files),
    )

    payload = json.dumps(report, indent=2)
    if args.output is not None:
        args.output.write_text(payload + "\n", encoding="utf-8")
    else:
        print(payload)

    for diagnostic in diagnostics:
        print(diagnostic.metadata.get("text") or diagnostic.value, file=sys.stderr)
    if diagnostics:
        parser.exit(1)


def _single_file_manifest(path: Path) -> RepoManifest:
    resolved = path.resolve()
    meta = FileMeta(
        path=resolved.name,
        size=resolved.stat().st_size,
        language="JavaScript",
        role="src",
        hash="",
    )
    return RepoManifest(root=str(resolved.parent), files=[meta])


def _build_report(manifest: RepoManifest, signals: List[Signal]) -> List[Dict[str, object]]:
    by_file: Dict[str, List[object]] = {meta.path: [] for meta in manifest.files}
    for signal in signals:
        if signal.name != "element":
            continue
        by_file.setdefault(signal.metadata["file"], []).append(signal.metadata["element"])
    return [{"file": path, "elements": elements} for path, elements in by_file.items() if elements]


if __name__ == "__main__":
    main(sys.argv[1:])
