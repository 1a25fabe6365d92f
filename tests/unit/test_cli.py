"""Tests for the scribe-engine CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from scribe_engine.cli.main import app

runner = CliRunner()

TRANSCRIPT = (
    "Patient complains of a dry cough and fever for two weeks. "
    "Blood pressure 120/80 mmHg, pulse 72 bpm."
)

CARDIAC_NOTE = (
    "Patient reports chest pain and palpitations. Blood pressure is 150/95. "
    "Prescribed amlodipine. Come back in 2 weeks for review."
)


@pytest.fixture()
def transcript_file(tmp_path: Path) -> Path:
    path = tmp_path / "transcript.txt"
    path.write_text(TRANSCRIPT)
    return path


@pytest.fixture()
def cardiac_file(tmp_path: Path) -> Path:
    path = tmp_path / "cardiac.txt"
    path.write_text(CARDIAC_NOTE)
    return path


@pytest.fixture()
def patient_file(tmp_path: Path) -> Path:
    path = tmp_path / "patient.json"
    path.write_text(json.dumps({"id": "p-1", "age": 34, "sex": "female"}))
    return path


class TestClassifyCommand:
    def test_json_output(self, transcript_file: Path) -> None:
        result = runner.invoke(app, ["classify", str(transcript_file), "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["template"] == "general-consultation"
        assert [c["section_id"] for c in payload["categorizations"]] == ["symptoms_1", "vitals_3"]

    def test_other_template(self, transcript_file: Path) -> None:
        result = runner.invoke(app, ["classify", str(transcript_file), "-t", "follow-up", "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert [c["section_id"] for c in payload["categorizations"]] == ["symptoms_1", "vitals_2"]

    def test_unknown_template(self, transcript_file: Path) -> None:
        result = runner.invoke(app, ["classify", str(transcript_file), "-t", "nope"])
        assert result.exit_code != 0

    def test_table_output(self, transcript_file: Path) -> None:
        result = runner.invoke(app, ["classify", str(transcript_file)])
        assert result.exit_code == 0
        assert "1.00" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["classify", str(tmp_path / "absent.txt")])
        assert result.exit_code != 0


class TestReasonCommand:
    def test_structured_input(self) -> None:
        result = runner.invoke(app, [
            "reason", "-c", "cough",
            "-s", "dry cough for three weeks", "-s", "worse at night",
            "-f", "clear lung fields", "-f", "afebrile",
            "--json",
        ])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["differential_diagnoses"][0]["condition"] == "Cough-variant Asthma"
        assert payload["clinical_priority"] == "low"

    def test_with_patient(self, patient_file: Path) -> None:
        result = runner.invoke(app, [
            "reason", "-c", "cough", "-s", "dry cough", "-s", "worse at night",
            "--patient", str(patient_file), "--json",
        ])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert any("demographic prior" in step for step in payload["reasoning_steps"])

    def test_from_transcript(self, transcript_file: Path) -> None:
        result = runner.invoke(app, ["reason", str(transcript_file), "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["differential_diagnoses"]

    def test_invalid_patient(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"age": -4}))
        result = runner.invoke(app, ["reason", "-c", "cough", "--patient", str(path)])
        assert result.exit_code != 0


class TestRiskCommand:
    def test_json_output(self, tmp_path: Path) -> None:
        content = tmp_path / "note.txt"
        content.write_text("Routine review.")
        result = runner.invoke(app, ["risk", str(content), "-m", "warfarin", "-m", "aspirin", "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert [f["factor"] for f in payload["risk_factors"]] == ["Drug Interaction"]
        assert payload["contraindications"][0]["type"] == "drug-drug"
        assert payload["urgency"]["level"] == "routine"

    def test_sessions_file(self, tmp_path: Path) -> None:
        content = tmp_path / "note.txt"
        content.write_text("Routine review.")
        sessions = tmp_path / "sessions.json"
        sessions.write_text(json.dumps([{"id": "s1", "diagnosis": ["Asthma"]}]))
        result = runner.invoke(app, [
            "risk", str(content), "-m", "atenolol", "--sessions", str(sessions), "--json",
        ])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["contraindications"][0]["severity"] == "contraindicated"

    def test_sessions_must_be_array(self, tmp_path: Path) -> None:
        content = tmp_path / "note.txt"
        content.write_text("Routine review.")
        sessions = tmp_path / "sessions.json"
        sessions.write_text(json.dumps({"id": "s1"}))
        result = runner.invoke(app, ["risk", str(content), "--sessions", str(sessions)])
        assert result.exit_code != 0

    def test_sessions_malformed_json(self, tmp_path: Path) -> None:
        content = tmp_path / "note.txt"
        content.write_text("Routine review.")
        sessions = tmp_path / "sessions.json"
        sessions.write_text("[{not json")
        result = runner.invoke(app, ["risk", str(content), "--sessions", str(sessions)])

        assert result.exit_code != 0
        assert not isinstance(result.exception, json.JSONDecodeError)
        assert "Invalid JSON" in result.output

    def test_guidelines_and_quality_in_json(self, tmp_path: Path) -> None:
        content = tmp_path / "note.txt"
        content.write_text("History of hypertension. BP 150/95. Plan: reduce salt.")
        result = runner.invoke(app, ["risk", str(content), "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert [g["compliance"] for g in payload["guidelines"]] == ["compliant"]
        assert payload["quality"]["documentation_completeness"] == 0.5


class TestTasksCommand:
    def test_json_output(self, cardiac_file: Path) -> None:
        result = runner.invoke(app, ["tasks", str(cardiac_file), "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["urgency"] == "urgent"
        assert payload["conditions"] == ["cardiology", "pain"]
        assert len(payload["tasks"]) == 7

    def test_regional_tasks_appended(self, tmp_path: Path) -> None:
        content = tmp_path / "note.txt"
        content.write_text("Known HIV positive, collecting ARVs at the clinic.")
        result = runner.invoke(app, ["tasks", str(content), "--region", "za", "--json"])

        assert result.exit_code == 0
        descriptions = [t["description"] for t in json.loads(result.output)["tasks"]]
        assert descriptions[-2:] == [
            "Public healthcare referral letter needed",
            "HIV/AIDS monitoring blood tests",
        ]


class TestProtocolCommand:
    def test_json_output(self) -> None:
        result = runner.invoke(app, ["protocol", "pneumonia", "--severity", "mild", "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["condition"] == "Community-acquired Pneumonia"
        assert payload["setting"] == "outpatient"
        assert payload["primary_treatment"][0]["intervention"] == "Amoxicillin"

    def test_table_output(self) -> None:
        result = runner.invoke(app, ["protocol", "migraine"])

        assert result.exit_code == 0
        assert "Migraine" in result.output
        assert "3 months" in result.output

    def test_table_lists_complications(self) -> None:
        result = runner.invoke(app, ["protocol", "migraine"])

        assert result.exit_code == 0
        assert "Status migrainosus" in result.output
