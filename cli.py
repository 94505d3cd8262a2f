"""
Flask CLI commands.

    flask --app app init-db
    flask --app app timer --subject-id 1
    flask --app app dashboard
"""

from __future__ import annotations

import click
from flask import current_app
from flask.cli import with_appcontext

TIMER_HELP = "[enter] play/pause  [f] finish  [r] reset  [q] quit"


def register_cli(app) -> None:
    app.cli.add_command(init_db_command)
    app.cli.add_command(timer_command)
    app.cli.add_command(dashboard_command)


@click.command("init-db")
@with_appcontext
def init_db_command():
    """Create the schema and seed default subjects."""
    from database import init_db, seed_subjects

    init_db()
    added = seed_subjects()
    click.echo(f"Database ready ({added} subjects seeded).")


def _api_url(api_url: str | None) -> str:
    return api_url or current_app.config.get("API_URL", "http://localhost:3000")


@click.command("timer")
@click.option("--subject-id", type=int, default=None, help="Subject to attribute the session to.")
@click.option("--notes", default="", help="What you worked on.")
@click.option("--api-url", default=None, help="StudyFlow server base URL.")
@with_appcontext
def timer_command(subject_id, notes, api_url):
    """Run a study timer in the terminal and record the session."""
    from client import StudyflowClient
    from timer import StudyTimer, TimerError

    with StudyflowClient(_api_url(api_url)) as client:
        subjects = client.list_subjects()
        if subject_id is None and subjects:
            subject_id = subjects[0]["id"]
        names = {s["id"]: s["name"] for s in subjects}
        click.echo(f"Studying: {names.get(subject_id, '-')}")

        done = []
        timer = StudyTimer(save=client.create_session, on_complete=done.append)
        click.echo(TIMER_HELP)
        try:
            while not done:
                command = click.prompt(
                    f"{timer.display()} ({timer.state.value})",
                    default="", show_default=False,
                ).strip().lower()
                try:
                    if command == "":
                        timer.toggle()
                    elif command == "r":
                        timer.reset()
                    elif command == "f":
                        if timer.finish(subject_id, notes=notes) is None:
                            click.echo("Could not save the session; try again.", err=True)
                    elif command == "q":
                        break
                    else:
                        click.echo(TIMER_HELP)
                except TimerError as e:
                    click.echo(str(e), err=True)
        finally:
            timer.close()

        if done:
            click.echo(f"Saved session #{done[0]['id']} ({done[0]['duration']}s).")


@click.command("dashboard")
@click.option("--api-url", default=None, help="StudyFlow server base URL.")
@with_appcontext
def dashboard_command(api_url):
    """Print total study time and per-subject totals."""
    from client import StudyflowClient
    from dashboard import load_dashboard
    from timer import format_duration

    with StudyflowClient(_api_url(api_url)) as client:
        summary = load_dashboard(client)

    click.echo(f"Total time: {summary.total_hours}h")
    click.echo(f"Subjects:   {summary.subject_count}")
    click.echo(f"Sessions:   {summary.session_count}")
    for stat in summary.stats:
        click.echo(f"  {stat['name']:<20} {format_duration(stat['total_duration'])}")
