import logging
import time
from contextlib import contextmanager

logger = logging.getLogger("boggle")

# Pipeline order: board -> histogram -> trie -> solve
STAGES = ("board", "histogram", "trie", "solve")


class StageTimer:
    """Timings and word counts for one board solve.

    Stage times are in milliseconds. Counts cover how the dictionary was
    filtered and how many findings the search produced.
    """

    def __init__(self):
        self.timings: dict[str, float] = {}
        self.counts: dict[str, int] = {}
        self._start = time.perf_counter()

    @contextmanager
    def stage(self, name: str):
        if name not in STAGES:
            raise ValueError(f"Unknown stage {name!r}, expected one of {STAGES}")
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.timings[name] = round((time.perf_counter() - t0) * 1000, 1)
            logger.info("stage=%s elapsed=%.1fms", name, self.timings[name])

    def record_trie(self, trie):
        self.counts["accepted_words"] = trie.accepted_count
        self.counts["rejected_words"] = trie.rejected_count
        self.counts["trie_nodes"] = trie.alloc_count

    def record_findings(self, n: int):
        self.counts["findings"] = n

    @property
    def total_ms(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 1)

    def summary(self) -> dict:
        return {
            "stages_ms": {name: self.timings[name] for name in STAGES if name in self.timings},
            "total_ms": self.total_ms,
            **self.counts,
        }

    def report(self) -> str:
        """One-line summary, stages in pipeline order."""
        parts = [f"{name}={self.timings[name]:.1f}ms" for name in STAGES if name in self.timings]
        parts += [f"{name}={n}" for name, n in self.counts.items()]
        return " ".join(parts)
