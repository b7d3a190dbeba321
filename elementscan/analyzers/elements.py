"""Analyzer that extracts element descriptors from JavaScript sources."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

from ..config import DEFAULT_FACTORY_NAME
from ..errors import UnresolvableKeyError
from ..javascript.parser import parse_javascript
from ..logging import get_logger
from ..models import FileMeta, RepoManifest, Signal
from ..polymer.element_finder import PolymerElementFinder
from .base import Analyzer

logger = get_logger("analyzers.elements")


class ElementAnalyzer(Analyzer):
    """Runs the element finder over every JavaScript file in the manifest."""

    def __init__(self, factory_name: str = DEFAULT_FACTORY_NAME) -> None:
        self._finder = PolymerElementFinder(factory_name)

    def supports(self, manifest: RepoManifest) -> bool:
        return any(meta.language == "JavaScript" for meta in manifest.files)

    async def analyze_async(self, manifest: RepoManifest) -> List[Signal]:
        root = Path(manifest.root)
        batches = await asyncio.gather(
            *(
                self._analyze_file(root, meta)
                for meta in manifest.files
                if meta.language == "JavaScript"
            )
        )
        return [signal for batch in batches for signal in batch]

    async def _analyze_file(self, root: Path, meta: FileMeta) -> List[Signal]:
        source = _read_source(root / meta.path)
        if source is None:
            return []
        document = parse_javascript(source, meta.path)
        try:
            elements = await self._finder.find_in_document(document)
        except UnresolvableKeyError as exc:
            logger.warning("%s", exc)
            return [
                Signal(
                    name="diagnostic",
                    value=exc.message,
                    source="polymer",
                    metadata={
                        "file": meta.path,
                        "location": exc.location.to_dict() if exc.location else None,
                        "text": str(exc),
                    },
                )
            ]

        logger.debug("Found %d elements in %s", len(elements), meta.path)
        return [
            Signal(
                name="element",
                value=element.tag_name or element.class_name or "",
                source="polymer",
                metadata={"file": meta.path, "element": element.to_dict()},
            )
            for element in elements
        ]


def _read_source(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Skipping unreadable file %s: %s", path, exc)
        return None


__all__ = ["ElementAnalyzer"]
