"""Base classes for analyzer plugins."""

import asyncio
from abc import ABC, abstractmethod
from typing import Iterable, List

from ..models import RepoManifest, Signal


class Analyzer(ABC):
    """Contract for analyzers that emit signals from a source manifest.

    Analyzers are coroutines at heart so that several of them, or one over
    many files, can share an event loop. :meth:`analyze` is the blocking
    entry point for callers that do not run one.
    """

    @abstractmethod
    def supports(self, manifest: RepoManifest) -> bool:
        """Return True when this analyzer should run for the source tree."""

    @abstractmethod
    async def analyze_async(self, manifest: RepoManifest) -> List[Signal]:
        """Produce signals describing the elements found in the manifest."""

    def analyze(self, manifest: RepoManifest) -> Iterable[Signal]:
        """Run :meth:`analyze_async` to completion on a fresh event loop."""
        return asyncio.run(self.analyze_async(manifest))
