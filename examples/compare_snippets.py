"""
Tiny helper script to show how the four metrics react to common edits.
"""

from __future__ import annotations

from similarity_guard import compare

ORIGINAL = """int count = 0;
for (int i = 0; i < n; i++) {
    count += values[i];
}
return count;
"""


def main() -> None:
    samples = {
        "reformatted": ORIGINAL.upper().replace("\n", "\n\n"),
        "renamed": ORIGINAL.replace("count", "runningTotal").replace("values", "xs"),
        "rewritten": "return sum(values[:n])\n",
    }

    for label, sample in samples.items():
        report = compare(ORIGINAL, sample)
        print("-" * 40)
        print(label)
        for name, value in report.metric_values().items():
            print(f"  {name:<12} {value:.3f}")
        print(f"  score        {report.score} ({report.verdict.value})")


if __name__ == "__main__":
    main()
