# src/tenureminer/pipelines/runner.py
from __future__ import annotations
import logging
import time
from typing import Callable, Iterable

logger = logging.getLogger(__name__)

class Step:
    def __init__(self, name: str, fn: Callable, kwargs: dict | None = None):
        self.name = name
        self.fn = fn
        self.kwargs = kwargs or {}
        self.elapsed: float | None = None

    def run(self):
        logger.info("▶️  Step: %s", self.name)
        t0 = time.perf_counter()
        result = self.fn(**self.kwargs)
        self.elapsed = time.perf_counter() - t0
        logger.info("⏱️  Step %s took %.2fs", self.name, self.elapsed)
        return result

    def __repr__(self):
        return f"Step({self.name!r}, {getattr(self.fn, '__name__', self.fn)!r})"

class Pipeline:
    def __init__(self, name: str, steps: Iterable[Step]):
        self.name = name
        self.steps = list(steps)

    def run(self) -> dict:
        """Run steps in order; returns {step name: result}. Stops at the first error."""
        logger.info("🚀 Pipeline: %s (steps=%d)", self.name, len(self.steps))
        results = {}
        for s in self.steps:
            try:
                results[s.name] = s.run()
            except Exception:
                logger.error("❌ Step failed: %s", s.name)
                raise
        logger.info("✅ Pipeline finished: %s", self.name)
        return results
