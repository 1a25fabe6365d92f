"""CLI for scribe-engine: classify / reason / risk / tasks / protocol commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from scribe_engine.classification.templates import BUILTIN_TEMPLATES, DEFAULT_TEMPLATE
from scribe_engine.core.config import EngineSettings, ObservabilityConfig
from scribe_engine.core.logging_config import setup_logging
from scribe_engine.engine import ClinicalEngine
from scribe_engine.models import NoteTemplate, PatientProfile, SessionRecord

app = typer.Typer(name="scribe-engine", help="Rule-based clinical decision support for consultation transcripts")
console = Console()


def _configure_logging(verbose: bool) -> None:
    if verbose:
        setup_logging(ObservabilityConfig(log_level="DEBUG"))


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise typer.BadParameter(f"Cannot read {path}: {exc}") from exc


def _load_patient(path: Optional[Path]) -> Optional[PatientProfile]:
    if path is None:
        return None
    try:
        return PatientProfile.model_validate_json(_read_text(path))
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid patient profile in {path}: {exc}") from exc


def _load_sessions(path: Optional[Path]) -> list[SessionRecord]:
    """Load prior sessions from a JSON array file."""
    if path is None:
        return []
    try:
        raw = json.loads(_read_text(path))
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(raw, list):
        raise typer.BadParameter(f"Expected JSON array in {path}")
    try:
        return [SessionRecord.model_validate(item) for item in raw]
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid session record in {path}: {exc}") from exc


def _find_template(template_id: Optional[str]) -> NoteTemplate:
    if template_id is None:
        return DEFAULT_TEMPLATE
    for template in BUILTIN_TEMPLATES:
        if template.id == template_id:
            return template
    known = ", ".join(t.id for t in BUILTIN_TEMPLATES)
    raise typer.BadParameter(f"Unknown template {template_id!r} (known: {known})")


def _emit_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, default=str))


@app.command()
def classify(
    transcript_file: Path = typer.Argument(..., help="Plain-text transcript"),
    template: Optional[str] = typer.Option(None, "--template", "-t", help="Built-in template id"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Split a transcript into the sections of a note template."""
    _configure_logging(verbose)
    note_template = _find_template(template)
    engine = ClinicalEngine(EngineSettings())
    transcript = _read_text(transcript_file)

    categorizations = engine.classify(transcript, note_template.sections)
    suggestion = engine.suggest_template(transcript, BUILTIN_TEMPLATES)

    if as_json:
        _emit_json({
            "template": note_template.id,
            "categorizations": [c.model_dump(mode="json") for c in categorizations],
            "suggested_template": suggestion.model_dump(mode="json") if suggestion else None,
        })
        return

    titles = {s.id: s.title for s in note_template.sections}
    table = Table(title=f"Sections ({note_template.name})")
    table.add_column("Section", style="cyan")
    table.add_column("Confidence", justify="right")
    table.add_column("Content", max_width=80)
    for cat in categorizations:
        table.add_row(titles.get(cat.section_id, cat.section_id), f"{cat.confidence:.2f}", cat.suggested_content)
    console.print(table)
    if suggestion is not None:
        console.print(f"[bold]Suggested template:[/bold] {suggestion.template_id} ({suggestion.reasoning})")


@app.command()
def reason(
    transcript_file: Optional[Path] = typer.Argument(None, help="Transcript to derive symptoms and findings from"),
    complaint: str = typer.Option("", "--complaint", "-c", help="Presenting complaint"),
    symptom: Optional[List[str]] = typer.Option(None, "--symptom", "-s", help="Symptom (repeatable)"),
    finding: Optional[List[str]] = typer.Option(None, "--finding", "-f", help="Examination finding (repeatable)"),
    prior: Optional[List[str]] = typer.Option(None, "--prior", help="Prior condition (repeatable)"),
    patient_file: Optional[Path] = typer.Option(None, "--patient", help="Patient profile JSON"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of tables"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Rank differential diagnoses for a presentation."""
    _configure_logging(verbose)
    engine = ClinicalEngine(EngineSettings())
    patient = _load_patient(patient_file)

    if transcript_file is not None:
        result = engine.reason_from_transcript(
            _read_text(transcript_file), patient, prior or [], complaint=complaint,
        )
    else:
        result = engine.reason(complaint, symptom or [], patient, finding or [], prior or [])

    if as_json:
        _emit_json(result.model_dump(mode="json"))
        return

    table = Table(title="Differential Diagnosis")
    table.add_column("Condition", style="green")
    table.add_column("ICD-10", style="cyan")
    table.add_column("Probability", justify="right")
    table.add_column("Likelihood")
    table.add_column("Emergency")
    for dx in result.differential_diagnoses:
        table.add_row(
            dx.condition, dx.icd10_code, f"{dx.probability:.2f}",
            dx.likelihood.value, dx.emergency_level.value,
        )
    console.print(table)
    console.print(f"[bold]Clinical priority:[/bold] {result.clinical_priority.value}")
    for title, items in (
        ("Uncertainty", result.uncertainty_factors),
        ("Next steps", result.next_steps),
    ):
        if items:
            console.print(f"\n[bold]{title}:[/bold]")
            for item in items:
                console.print(f"  - {item}")


@app.command()
def risk(
    content_file: Path = typer.Argument(..., help="Note or transcript content"),
    medication: Optional[List[str]] = typer.Option(None, "--medication", "-m", help="Current medication (repeatable)"),
    patient_file: Optional[Path] = typer.Option(None, "--patient", help="Patient profile JSON"),
    sessions_file: Optional[Path] = typer.Option(None, "--sessions", help="JSON array of prior sessions"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of tables"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Identify risk factors, contraindications and overall urgency."""
    _configure_logging(verbose)
    engine = ClinicalEngine(EngineSettings())
    content = _read_text(content_file)
    patient = _load_patient(patient_file)
    sessions = _load_sessions(sessions_file)
    medications = medication or []

    factors = engine.analyze_risk(content, patient, sessions, medications)
    alerts = engine.check_contraindications(medications, patient, sessions)
    urgency = engine.assess_urgency(content, factors)
    guidelines = engine.assess_guideline_compliance(content)
    quality = engine.quality_metrics(content)

    if as_json:
        _emit_json({
            "risk_factors": [f.model_dump(mode="json") for f in factors],
            "contraindications": [a.model_dump(mode="json") for a in alerts],
            "urgency": urgency.model_dump(mode="json"),
            "guidelines": [g.model_dump(mode="json") for g in guidelines],
            "quality": quality.model_dump(mode="json"),
        })
        return

    table = Table(title="Risk Factors")
    table.add_column("Factor", style="green")
    table.add_column("Category", style="cyan")
    table.add_column("Severity")
    table.add_column("Recommendations", max_width=60)
    for factor in factors:
        table.add_row(factor.factor, factor.category.value, factor.severity.value, "; ".join(factor.recommendations))
    console.print(table)

    for alert in alerts:
        console.print(
            f"[red]{alert.severity.value}[/red] {alert.medication} / {alert.conflict_with}: {alert.description}"
        )
    console.print(f"\n[bold]Urgency:[/bold] {urgency.level.value} ({urgency.reasoning})")
    for g in guidelines:
        console.print(f"[bold]{g.guideline}:[/bold] {g.compliance.value} ({g.evidence})")
    console.print(
        f"[bold]Documentation:[/bold] completeness {quality.documentation_completeness:.2f}, "
        f"reasoning {quality.clinical_reasoning_score:.2f}, evidence {quality.evidence_based_score:.2f}"
    )


@app.command()
def tasks(
    content_file: Path = typer.Argument(..., help="Note or transcript content"),
    region: Optional[str] = typer.Option(None, "--region", help="Region code for regional tasks"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Suggest follow-up tasks for a consultation."""
    _configure_logging(verbose)
    engine = ClinicalEngine(EngineSettings())
    content = _read_text(content_file)

    analysis = engine.analyze(content)
    regional = engine.regional_suggestions(content, region)
    suggestions = analysis.suggested_tasks + regional

    if as_json:
        _emit_json({
            "tasks": [t.model_dump(mode="json") for t in suggestions],
            "conditions": analysis.extracted_conditions,
            "urgency": analysis.urgency.value,
        })
        return

    table = Table(title="Suggested Tasks")
    table.add_column("Type", style="cyan")
    table.add_column("Description", style="green")
    table.add_column("Priority")
    table.add_column("Due")
    for task in suggestions:
        table.add_row(task.type.value, task.description, task.priority.value, task.due_date.date().isoformat())
    console.print(table)
    console.print(f"[bold]Urgency:[/bold] {analysis.urgency.value}")


@app.command()
def protocol(
    condition: str = typer.Argument(..., help="Condition name or ICD-10 code"),
    severity: str = typer.Option("moderate", "--severity", help="mild, moderate or severe"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of tables"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Show the treatment protocol for a condition."""
    _configure_logging(verbose)
    result = ClinicalEngine(EngineSettings()).protocol(condition, severity)

    if as_json:
        _emit_json(result.model_dump(mode="json"))
        return

    header = f"{result.condition} ({result.severity.value}, {result.setting.value})"
    if result.is_generic:
        header += " [yellow]generic[/yellow]"
    console.print(f"[bold]{header}[/bold]")

    for title, treatments in (
        ("Primary treatment", result.primary_treatment),
        ("Alternatives", result.alternative_treatment),
    ):
        if not treatments:
            continue
        table = Table(title=title)
        table.add_column("Intervention", style="green")
        table.add_column("Dosage")
        table.add_column("Duration")
        table.add_column("Evidence", justify="center")
        table.add_column("EML", justify="center")
        table.add_column("Side effects", max_width=40)
        for t in treatments:
            table.add_row(
                t.intervention, t.dosage or "-", t.duration, t.evidence_level.value,
                "yes" if t.essential_list else "", ", ".join(t.side_effects),
            )
        console.print(table)

    console.print(f"[bold]Follow-up:[/bold] {result.follow_up.interval}")
    for flag in result.follow_up.red_flags:
        console.print(f"  [red]![/red] {flag}")
    for comp in result.complications:
        console.print(f"\n[bold]{comp.complication}:[/bold] {comp.management}")
        console.print(f"  Escalate: {comp.escalation}")


if __name__ == "__main__":
    app()
