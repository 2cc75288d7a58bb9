from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from jobmatch.cli import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def write_json(path: Path, payload: object) -> None:
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")


def build_inputs(tmp_path: Path) -> dict[str, Path]:
    jobs_path = tmp_path / "jobs.json"
    profile_path = tmp_path / "profile.json"
    criteria_path = tmp_path / "criteria.yaml"

    write_json(
        jobs_path,
        [
            {
                "id": 1,
                "title": "Backend Engineer",
                "workplaceType": "Remote",
                "location": "Berlin, Germany",
                "skills": ["Python", "Django"],
            },
            {"id": 2, "title": "Frontend Engineer", "workplaceType": "Remote", "skills": ["React"]},
            {"id": 3, "title": "QA Analyst", "workplaceType": "On-site", "skills": ["Selenium"]},
            {"id": 4, "title": "DevOps Engineer", "workplaceType": "Remote"},
        ],
    )
    write_json(profile_path, {"aiProfile": {"skills": ["python"], "workStyle": "remote"}})
    criteria_path.write_text("filters:\n  workplace:\n    - Remote\n", encoding="utf-8")
    return {"jobs": jobs_path, "profile": profile_path, "criteria": criteria_path}


def test_cli_runs_pipeline_and_writes_output(tmp_path: Path, runner: CliRunner) -> None:
    inputs = build_inputs(tmp_path)
    output_path = tmp_path / "results.json"

    result = runner.invoke(
        app,
        [
            "--jobs",
            str(inputs["jobs"]),
            "--profile",
            str(inputs["profile"]),
            "--criteria",
            str(inputs["criteria"]),
            "--pending-job-id",
            "4",
            "--output",
            str(output_path),
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Matched 3 of 4 jobs (primary)" in result.output
    assert output_path.exists()

    rendered = json.loads(output_path.read_text(encoding="utf-8"))
    metadata = rendered["metadata"]
    assert metadata["job_count"] == 4
    assert metadata["result_count"] == 3
    assert metadata["mode"] == "primary"
    assert metadata["is_related"] is False
    assert metadata["active_filters"] == 1
    assert metadata["pending_status"] == "pinned"
    assert metadata["errors"] == []

    results = rendered["results"]
    assert [item["job_id"] for item in results] == ["4", "1", "2"]
    assert [item["match_score"] for item in results] == [50, 35, 25]
    assert results[0]["is_pending_application"] is True
    assert all(item["is_related"] is False for item in results)


def test_cli_relaxes_narrow_filters(tmp_path: Path, runner: CliRunner) -> None:
    inputs = build_inputs(tmp_path)
    criteria_path = tmp_path / "narrow.json"
    write_json(criteria_path, {"workplace": ["On-site"]})
    output_path = tmp_path / "results.json"

    result = runner.invoke(
        app,
        [
            "--jobs",
            str(inputs["jobs"]),
            "--criteria",
            str(criteria_path),
            "--output",
            str(output_path),
        ],
    )

    assert result.exit_code == 0, result.output
    rendered = json.loads(output_path.read_text(encoding="utf-8"))
    assert rendered["metadata"]["mode"] == "relaxed"
    assert [item["job_id"] for item in rendered["results"]] == ["3"]
    assert rendered["results"][0]["is_related"] is True
    assert rendered["results"][0]["match_score"] == 50


def test_cli_rejects_invalid_config(tmp_path: Path, runner: CliRunner) -> None:
    inputs = build_inputs(tmp_path)
    config_path = tmp_path / "config.yaml"
    config_path.write_text("core:\n  relaxation_threshold: many\n", encoding="utf-8")

    result = runner.invoke(
        app,
        [
            "--jobs",
            str(inputs["jobs"]),
            "--output",
            str(tmp_path / "results.json"),
            "--config",
            str(config_path),
        ],
    )

    assert result.exit_code != 0
    assert not (tmp_path / "results.json").exists()


def test_cli_reports_unavailable_pending_job_once(tmp_path: Path, runner: CliRunner) -> None:
    inputs = build_inputs(tmp_path)
    session_path = tmp_path / "session.json"
    audit_path = tmp_path / "audit.jsonl"
    write_json(session_path, {"pending_application": {"jobId": "99", "timestamp": 1719741600000}})
    args = [
        "--jobs",
        str(inputs["jobs"]),
        "--output",
        str(tmp_path / "results.json"),
        "--session",
        str(session_path),
        "--as-of",
        "2024-07-01T00:00:00Z",
        "--audit-log",
        str(audit_path),
    ]

    first = runner.invoke(app, args)
    second = runner.invoke(app, [*args, "--pending-job-id", "99"])

    assert first.exit_code == 0, first.output
    assert second.exit_code == 0, second.output
    assert "no longer available" in first.output
    assert "no longer available" not in second.output

    session = json.loads(session_path.read_text(encoding="utf-8"))
    assert session["pending_application"] is None
    assert session["pending_notice_shown"] is True

    audit_lines = audit_path.read_text(encoding="utf-8").splitlines()
    assert len(audit_lines) == 2
    records = [json.loads(line) for line in audit_lines]
    assert [record["pending_status"] for record in records] == ["missing", "missing"]
    assert records[0]["notices"] == ["pending_job_unavailable"]
    assert records[1]["notices"] == []
