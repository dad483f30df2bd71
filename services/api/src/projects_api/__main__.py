"""Run the API with uvicorn: python -m projects_api [--host HOST] [--port PORT]."""

import typer
import uvicorn

app = typer.Typer()


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", "--host", envvar="API_HOST", help="Bind address"),  # noqa: S104
    port: int = typer.Option(8000, "--port", envvar="API_PORT", help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Serve the projects API"""
    uvicorn.run("projects_api.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
