from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List

import typer
import yaml

from .config import REFERENCE_POLICIES, GuardConfig, load_config
from .engine import compare as compare_texts
from .errors import ConfigurationError, InvalidInputError, SuspendedUserError
from .pipeline import evaluate_submission
from .store import JsonFileViolationStore
from .violations import ViolationTracker, warning_level_for_count

app = typer.Typer(help="Code similarity and plagiarism policy CLI.", no_args_is_help=True)


@app.command()
def compare(
    code_a: Path = typer.Option(..., exists=True, readable=True, dir_okay=False),
    code_b: Path = typer.Option(..., exists=True, readable=True, dir_okay=False),
    config: Path | None = typer.Option(None, "--config", "-c"),
) -> None:
    """Compare two source files and emit the similarity report as JSON."""
    cfg = _load_config(config)
    try:
        report = compare_texts(_read_code(code_a), _read_code(code_b), cfg.similarity)
    except InvalidInputError as exc:
        raise typer.BadParameter(str(exc)) from exc
    typer.echo(json.dumps(report.to_dict(), indent=2))


@app.command()
def submit(
    user_id: str = typer.Option(..., "--user-id", help="Submitting user."),
    submission: Path = typer.Option(..., exists=True, readable=True, dir_okay=False),
    reference: List[Path] = typer.Option(
        ...,
        "--reference",
        "-r",
        exists=True,
        readable=True,
        dir_okay=False,
        help="Reference solution(s) to compare against; repeat for several.",
    ),
    state_file: Path = typer.Option(
        ..., "--state-file", dir_okay=False, help="JSON file holding violation records."
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    threshold: int | None = typer.Option(
        None, "--threshold", help="Override the plagiarism threshold (percent)."
    ),
    reference_policy: str | None = typer.Option(
        None,
        "--reference-policy",
        help=f"How to pick the reference: {', '.join(REFERENCE_POLICIES)}.",
    ),
) -> None:
    """Score a graded submission and apply the escalating violation policy."""
    cfg = _load_config(config)
    if threshold is not None:
        cfg.violations.plagiarism_threshold = threshold
    if reference_policy is not None:
        cfg.violations.reference_policy = reference_policy
    try:
        cfg.validate()
    except ConfigurationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    references: Dict[str, str] = {}
    for path in reference:
        references[str(path)] = _read_code(path)

    tracker = ViolationTracker(
        JsonFileViolationStore(state_file),
        plagiarism_threshold=cfg.violations.plagiarism_threshold,
    )
    try:
        outcome = evaluate_submission(
            user_id, _read_code(submission), references, tracker, cfg
        )
    except SuspendedUserError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    except InvalidInputError as exc:
        raise typer.BadParameter(str(exc)) from exc
    typer.echo(json.dumps(outcome.to_dict(), indent=2))


@app.command()
def status(
    user_id: str = typer.Option(..., "--user-id"),
    state_file: Path = typer.Option(..., "--state-file", dir_okay=False),
) -> None:
    """Print the stored violation record for a user."""
    record = JsonFileViolationStore(state_file).load(user_id)
    payload = record.to_dict()
    payload["level"] = warning_level_for_count(record.violation_count).value
    typer.echo(json.dumps(payload, indent=2))


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = GuardConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


def _load_config(path: Path | None) -> GuardConfig:
    try:
        return load_config(path)
    except ConfigurationError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _read_code(path: Path) -> str:
    """Read a submission from disk; undecodable bytes are invalid input."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise typer.BadParameter(f"{path} is not UTF-8 text.") from exc


if __name__ == "__main__":
    main()
