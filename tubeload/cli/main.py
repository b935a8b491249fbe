"""tubeload CLI - Main commands."""
import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn

from ..core.upload.models import PrivacyStatus, parse_tags

app = typer.Typer(
    name="tubeload",
    help="Direct resumable uploads to YouTube",
    add_completion=False
)
console = Console()

PUBLISH_AT_FORMATS = ["%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M"]

ClientIdOption = typer.Option(
    "", "--client-id", envvar="TUBELOAD_CLIENT_ID", help="OAuth client id"
)
ClientSecretOption = typer.Option(
    None, "--client-secret", envvar="TUBELOAD_CLIENT_SECRET", help="OAuth client secret"
)


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def _require_client_id(client_id: str) -> None:
    if not client_id:
        console.print("[yellow]Set TUBELOAD_CLIENT_ID (or pass --client-id) to enable Google auth[/yellow]")
        raise typer.Exit(1)


@app.callback()
def main_options(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Direct resumable uploads to YouTube."""
    from tubeload import setup_logging

    logging.basicConfig(format="%(asctime)s %(name)s %(levelname)s %(message)s")
    setup_logging(logging.DEBUG if verbose else logging.WARNING)


@app.command()
def authorize(
    client_id: str = ClientIdOption,
    client_secret: Optional[str] = ClientSecretOption,
):
    """Run the consent flow and confirm a token can be obtained."""
    from tubeload import YouTubeUploader, AuthorizationError

    _require_client_id(client_id)

    async def do_authorize():
        async with YouTubeUploader(client_id, client_secret) as yt:
            try:
                credential = await yt.authorize()
            except AuthorizationError as e:
                console.print(f"[red]Authorization failed: {e}[/red]")
                raise typer.Exit(1)
            console.print("[green]Authorized[/green]")
            console.print(f"Scopes: {', '.join(credential.scopes)}")

    run_async(do_authorize())


@app.command()
def upload(
    file_path: Path = typer.Argument(..., help="Video file to upload", exists=True, dir_okay=False),
    title: str = typer.Option(None, "--title", "-t", help="Title (defaults to file name)"),
    description: str = typer.Option("", "--description", "-d", help="Description"),
    tags: str = typer.Option("", "--tags", help="Comma-separated tags"),
    privacy: PrivacyStatus = typer.Option(PrivacyStatus.PRIVATE, "--privacy", "-p", help="Visibility"),
    publish_at: Optional[datetime] = typer.Option(
        None, "--publish-at", formats=PUBLISH_AT_FORMATS,
        help="Schedule publication (local time)"
    ),
    chunk_size: int = typer.Option(8, "--chunk-size", min=1, help="Chunk size in MiB"),
    client_id: str = ClientIdOption,
    client_secret: Optional[str] = ClientSecretOption,
):
    """Upload a video to YouTube."""
    from tubeload import YouTubeUploader, APIConfig, UploadError

    _require_client_id(client_id)

    async def do_upload():
        config = APIConfig.for_client(
            client_id,
            client_secret,
            chunk_size=chunk_size * 1024 * 1024
        )
        async with YouTubeUploader(config=config) as yt:
            try:
                request = yt.build_request(
                    file_path,
                    title=title,
                    description=description,
                    tags=parse_tags(tags),
                    privacy=privacy,
                    publish_at=publish_at
                )
            except ValueError as e:
                console.print(f"[red]{e}[/red]")
                raise typer.Exit(1)

            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=console
            ) as progress:
                task = progress.add_task(f"Uploading {file_path.name}", total=100)

                def on_status(status: str):
                    progress.update(task, description=status)

                def on_progress(percentage: int):
                    progress.update(task, completed=percentage)

                try:
                    result = await yt.upload(
                        request,
                        on_status=on_status,
                        on_progress=on_progress
                    )
                except UploadError as e:
                    progress.stop()
                    console.print(f"[red]{e}[/red]")
                    raise typer.Exit(1)

            console.print(f"[green]Uploaded video ID:[/green] {result.video_id}")
            console.print(f"URL: {result.watch_url}")
            if publish_at:
                console.print(f"Scheduled for: {publish_at.isoformat()}")

    run_async(do_upload())


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
