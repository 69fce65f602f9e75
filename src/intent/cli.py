"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.table import Table
from PySide6.QtCore import QSizeF
from PySide6.QtGui import QImage, QPainter

from .appctx import AppContext, create_context
from .crop.aspect import constrain
from .crop.overlay import FrameOverlayRenderer
from .domain.models import AspectRatio, CropRect, Frame
from .errors import (
    FrameNotFoundError,
    IntentError,
    ProjectNotFoundError,
    SettingsError,
)
from .utils.console_logger import ensure_console_logger

app = typer.Typer(help="Cut several framed crops out of a single photo")


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (ProjectNotFoundError, FrameNotFoundError, SettingsError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except IntentError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _context(ctx: typer.Context) -> AppContext:
    if ctx.obj is None:
        ctx.obj = create_context(ctx.meta.get("settings_path"))
        ctx.call_on_close(ctx.obj.close)
    return ctx.obj


def _fail(message: Optional[str]) -> None:
    typer.echo(f"Error: {message or 'operation failed'}", err=True)
    raise typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    settings: Optional[Path] = typer.Option(
        None, "--settings", envvar="INTENT_SETTINGS", help="Path to settings.json"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log to stdout"),
) -> None:
    """Manage crop projects stored in the local database."""

    ctx.meta["settings_path"] = settings
    if verbose:
        ensure_console_logger(logging.getLogger("intent"), "intent-cli", level=logging.DEBUG)


@app.command("import")
@_handle_errors
def import_photo(
    ctx: typer.Context,
    image: Path = typer.Argument(..., exists=True, dir_okay=False),
    name: Optional[str] = typer.Option(None, "--name", "-n"),
) -> None:
    """Import a photo as a new project."""

    resp = _context(ctx).projects.import_file(image, name=name)
    if not resp.success:
        _fail(resp.error)
    print(f"[green]Imported '{resp.name}' as {resp.project_id}")


@app.command("list")
@_handle_errors
def list_projects(ctx: typer.Context) -> None:
    """List projects, newest first."""

    table = Table("ID", "Name", "Created", "Frames")
    for project in _context(ctx).projects.list_projects():
        table.add_row(
            project.id,
            project.name,
            project.created_at.strftime("%Y-%m-%d %H:%M"),
            str(project.frame_count),
        )
    print(table)


@app.command()
@_handle_errors
def show(ctx: typer.Context, project_id: str) -> None:
    """Show the frames of a project in display order."""

    project = _context(ctx).projects.get_project(project_id)
    table = Table("#", "Frame", "x", "y", "width", "height", "Ratio", title=project.name)
    for index, frame in enumerate(project.frames, start=1):
        rect = frame.crop_rect
        table.add_row(
            str(index),
            frame.id,
            f"{rect.x:.3f}",
            f"{rect.y:.3f}",
            f"{rect.width:.3f}",
            f"{rect.height:.3f}",
            frame.aspect_ratio.value,
        )
    print(table)


@app.command("add-frame")
@_handle_errors
def add_frame(
    ctx: typer.Context,
    project_id: str,
    x: float = typer.Option(..., help="Left edge as a fraction of the width"),
    y: float = typer.Option(..., help="Top edge as a fraction of the height"),
    width: float = typer.Option(...),
    height: float = typer.Option(...),
    aspect: Optional[str] = typer.Option(
        None, help="Free, 4:3, 16:9, 1:1 or 3:2; defaults to the editor setting"
    ),
) -> None:
    """Commit a new frame; a ratio other than Free shrinks the rectangle to fit it."""

    context = _context(ctx)
    try:
        aspect_ratio = AspectRatio.parse(aspect or context.settings.get("editor.default_aspect_ratio"))
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--aspect") from exc
    project = context.projects.get_project(project_id)
    rect = constrain(CropRect(x, y, width, height), aspect_ratio)
    resp = context.frames.add(project, Frame(crop_rect=rect, aspect_ratio=aspect_ratio))
    if not resp.success:
        _fail(resp.error)
    print(f"[green]Added frame {resp.frame_id} ({resp.frame_count} total)")


@app.command("remove-frame")
@_handle_errors
def remove_frame(ctx: typer.Context, project_id: str, frame_id: str) -> None:
    """Remove a frame from a project."""

    context = _context(ctx)
    project = context.projects.get_project(project_id)
    resp = context.frames.remove(project, frame_id)
    if not resp.success:
        _fail(resp.error)
    if resp.removed:
        print(f"[green]Removed frame {frame_id}")
    else:
        print(f"[yellow]Frame {frame_id} was not in the project")


@app.command()
@_handle_errors
def rename(ctx: typer.Context, project_id: str, name: str) -> None:
    """Rename a project."""

    resp = _context(ctx).projects.rename_project(project_id, name)
    if not resp.success:
        _fail(resp.error)
    print(f"[green]Renamed project to '{resp.name}'")


@app.command()
@_handle_errors
def delete(
    ctx: typer.Context,
    project_id: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete a project together with its frames."""

    if not yes:
        typer.confirm(f"Delete project {project_id} and all of its frames?", abort=True)
    resp = _context(ctx).projects.delete_project(project_id)
    if not resp.success:
        _fail(resp.error)
    print(f"[green]Deleted project {project_id}")


@app.command()
@_handle_errors
def export(
    ctx: typer.Context,
    project_id: str,
    frame_id: str,
    destination: Optional[Path] = typer.Option(None, "--dest", "-d", file_okay=False),
) -> None:
    """Export one frame as a JPEG."""

    resp = _context(ctx).projects.export_frame(project_id, frame_id, destination)
    if not resp.success:
        _fail(resp.error)
    print(f"[green]Exported {resp.width}x{resp.height} frame")


@app.command()
@_handle_errors
def thumbnail(
    ctx: typer.Context,
    project_id: str,
    frame_id: str,
    output: Path = typer.Argument(..., dir_okay=False),
    size: int = typer.Option(200, min=1),
) -> None:
    """Write a square thumbnail of one frame."""

    image = _context(ctx).projects.frame_thumbnail(project_id, frame_id, size=size)
    if not image.save(str(output)):
        _fail(f"Cannot write {output}")
    print(f"[green]Wrote {size}px thumbnail to {output}")


@app.command("render-overlay")
@_handle_errors
def render_overlay(
    ctx: typer.Context,
    project_id: str,
    output: Path = typer.Argument(..., dir_okay=False),
    width: int = typer.Option(1024, min=1, help="Preview width in pixels"),
) -> None:
    """Render the photo with every frame highlighted, as shown in the editor."""

    context = _context(ctx)
    project = context.projects.get_project(project_id)
    original = context.image_store.load_original(project)
    preview = original.scaledToWidth(width).convertToFormat(
        QImage.Format.Format_ARGB32_Premultiplied
    )
    renderer = FrameOverlayRenderer()
    painter = QPainter(preview)
    try:
        renderer.paint(painter, project.frames, QSizeF(preview.width(), preview.height()))
    finally:
        painter.end()
    if not preview.save(str(output)):
        _fail(f"Cannot write {output}")
    print(f"[green]Rendered {project.frame_count} frames to {output}")


if __name__ == "__main__":  # pragma: no cover
    app()
