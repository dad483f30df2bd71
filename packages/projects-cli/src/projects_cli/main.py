import os
import sys

import typer

from projects_cli.commands import project
from shared.logging_config import setup_logging

app = typer.Typer()


@app.callback()
def callback():
    """
    Projects CLI
    """
    # stdout is reserved for command output
    setup_logging(
        service_name="projects-cli",
        log_level=os.getenv("LOG_LEVEL", "WARNING"),
        stream=sys.stderr,
    )


app.add_typer(project.app, name="project")
