"""ensub CLI entry point."""

from typing import Annotated, Optional

import typer
from dotenv import load_dotenv

from ensub import __version__
from ensub.cli.detect import detect
from ensub.cli.generate import generate

app = typer.Typer(
    name="ensub",
    help="ensub — batch English subtitles for a video library via Whisper.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"ensub {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """ensub — batch English subtitles for a video library via Whisper."""
    # Load .env file for ENSUB_* settings
    # Does not override existing env vars — shell exports take precedence
    load_dotenv(override=False)


app.command("generate")(generate)
app.command("detect")(detect)
