from __future__ import annotations

from pathlib import Path

from similarity_guard.models import SimilarityReport, Verdict

SUM_LOOP = """int count = 0;
for (int i = 0; i < n; i++) {
    count += values[i];
}
return count;
"""

# Same program with ``count`` renamed to an identifier of equal length.
SUM_LOOP_RENAMED = SUM_LOOP.replace("count", "total")

# Same program with ``count`` renamed to a much longer identifier.
SUM_LOOP_LONG_NAME = SUM_LOOP.replace("count", "running_total_of_all_values")

GREETING = """def greet(name):
    print('hello ' + name)
"""


def make_report(score: int, verdict: Verdict = Verdict.HIGH_SIMILARITY) -> SimilarityReport:
    """Build a report with the given composite score."""
    value = score / 100
    return SimilarityReport(
        jaccard=value,
        cosine=value,
        levenshtein=value,
        winnowing=value,
        score=score,
        verdict=verdict,
    )


def write_code(path: Path, text: str) -> Path:
    """Write a code sample to disk and return its path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path
