"""Helper utilities for constructing temporary JavaScript source trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Iterable, Mapping

from elementscan.models import RepoManifest
from elementscan.repo_scanner import RepoScanner


class RepoBuilder:
    """Writes JavaScript sources into a throwaway tree and rescans it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "repo"
        self.root.mkdir()
        self._scanner = RepoScanner()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the tree."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def write_factory_element(
        self, relative: str, tag_name: str, entries: Iterable[str] = (), *, factory: str = "Polymer"
    ) -> None:
        """Write a ``Polymer({is: ...})`` declaration with extra body entries."""
        body = ",\n".join([f"  is: '{tag_name}'", *(f"  {entry}" for entry in entries)])
        self.write({relative: f"{factory}({{\n{body},\n}});\n"})

    def write_class_element(
        self, relative: str, class_name: str, members: Iterable[str] = (), *, base: str = "Polymer.Element"
    ) -> None:
        """Write a ``class X extends Base {...}`` declaration with the given members."""
        body = "".join(f"  {member}\n" for member in members)
        self.write({relative: f"class {class_name} extends {base} {{\n{body}}}\n"})

    def scan(self, **kwargs: object) -> RepoManifest:
        """Return a fresh manifest of the tree; keyword arguments go to the scanner."""
        return self._scanner.scan(str(self.root), **kwargs)  # type: ignore[arg-type]

    def path(self) -> Path:
        """Return the tree root path."""
        return self.root


__all__ = ["RepoBuilder"]
