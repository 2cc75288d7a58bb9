"""Typer CLI entrypoint for the match pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError

from .config import load_settings
from .container import create_container
from .logging import configure_logging
from .pipeline import AuditLogger, SessionStore

app = typer.Typer(help="Job match and filter CLI.")


@app.command()
def run(
    jobs: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Job postings JSON or JSONL path."),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path.",
    ),
    profile: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="Candidate AI profile JSON path."),
    criteria: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="Filter criteria JSON or YAML path."),
    pending_job_id: Optional[str] = typer.Option(None, help="Job id of a pending application to pin first."),
    session: Optional[Path] = typer.Option(None, dir_okay=False, help="Session state JSON path (read and updated)."),
    as_of: Optional[str] = typer.Option(None, help="Reference date (ISO) for date filters and pending expiry."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
) -> None:
    """Run the match pipeline."""
    settings: dict[str, Any] = {}
    if config:
        try:
            settings = load_settings(config)
        except ValidationError as exc:
            raise typer.BadParameter(f"Invalid config: {exc}", param_name="config") from exc

    configure_logging(log_level)

    container = create_container(settings=settings)
    pipeline = container.pipeline()
    session_store = SessionStore(session) if session else None
    audit_logger = AuditLogger(audit_log) if audit_log else None

    payload = pipeline.run(
        jobs_path=jobs,
        output_path=output,
        profile_path=profile,
        criteria_path=criteria,
        pending_job_id=pending_job_id,
        session_store=session_store,
        as_of=as_of,
        audit_logger=audit_logger,
    )
    metadata = payload["metadata"]
    typer.echo(
        f"Matched {metadata['result_count']} of {metadata['job_count']} jobs "
        f"({metadata['mode']}). Results saved to {output}."
    )
    if "pending_job_unavailable" in metadata["notices"]:
        typer.echo("The job you were applying to is no longer available.", err=True)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
