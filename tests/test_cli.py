"""CLI behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from elementscan.cli import _build_parser, main
from elementscan.logging import configure_logging


def test_cli_accepts_verbose_before_and_after_command() -> None:
    parser = _build_parser()

    assert parser.parse_args(["--verbose", "scan"]).verbose is True
    assert parser.parse_args(["scan", "--verbose"]).verbose is True


def test_cli_scan_defaults_to_current_directory() -> None:
    args = _build_parser().parse_args(["scan"])

    assert args.command == "scan"
    assert args.path == "."
    assert args.config is None
    assert args.output is None


def test_cli_scan_prints_json_report(repo_builder, capsys) -> None:
    repo_builder.write(
        {
            "x-one.js": "Polymer({is: 'x-one', size: 1});\n",
            "empty.js": "const a = 1;\n",
        }
    )

    main(["scan", str(repo_builder.path())])

    report = json.loads(capsys.readouterr().out)
    assert [entry["file"] for entry in report] == ["x-one.js"]
    element = report[0]["elements"][0]
    assert element["tagName"] == "x-one"
    assert [prop["name"] for prop in element["properties"]] == ["size"]


def test_cli_scan_single_file_to_output(tmp_path: Path) -> None:
    source = tmp_path / "x-solo.js"
    source.write_text("class XSolo {}\n", encoding="utf-8")
    output = tmp_path / "report.json"

    main(["scan", str(source), "--output", str(output)])

    report = json.loads(output.read_text(encoding="utf-8"))
    assert report[0]["file"] == "x-solo.js"
    assert report[0]["elements"][0]["className"] == "XSolo"


def test_cli_scan_exits_with_diagnostics(repo_builder, capsys) -> None:
    repo_builder.write({"bad.js": "Polymer({[dynamic]: 1});\n"})

    with pytest.raises(SystemExit) as excinfo:
        main(["scan", str(repo_builder.path())])

    assert excinfo.value.code == 1
    assert "bad.js:1:" in capsys.readouterr().err


def test_cli_scan_uses_configured_factory_name(repo_builder, capsys) -> None:
    repo_builder.write(
        {
            ".elementscan.yml": "factory_name: Register\n",
            "x-reg.js": "Register({is: 'x-reg'});\nPolymer({is: 'x-ignored'});\n",
        }
    )

    main(["scan", str(repo_builder.path())])

    report = json.loads(capsys.readouterr().out)
    assert [element["tagName"] for element in report[0]["elements"]] == ["x-reg"]


def test_cli_scan_writes_configured_module_logs(repo_builder, capsys) -> None:
    repo_builder.write(
        {
            ".elementscan.yml": "log_levels:\n  polymer.finder: debug\n",
            "x-log.js": "Polymer({is: 'x-log'});\n",
        }
    )
    log_file = repo_builder.path() / "scan.log"

    main(["scan", str(repo_builder.path()), "--log-file", str(log_file)])
    configure_logging()

    text = log_file.read_text(encoding="utf-8")
    assert "elementscan.polymer.finder: Closed factory declaration x-log" in text
    assert "elementscan.analyzers.elements" not in text
