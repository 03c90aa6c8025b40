from __future__ import annotations

import typer

from . import app as demo_app
from .config import Settings

app = typer.Typer(help="Frame-paced event dispatch utility")


@app.command()
def run(
    frames: int | None = typer.Option(None, help="Stop after this many frames"),
    rate: int | None = typer.Option(None, help="Frames per second, 0 to disable pacing"),
    health: int | None = typer.Option(None, help="Starting health of the demo target"),
    damage: int | None = typer.Option(None, help="Damage dealt per hit"),
    verbose: bool = typer.Option(False, help="Print effective settings"),
) -> None:
    """Run the damage demo on a frame loop."""
    overrides: dict[str, object] = {}
    if frames is not None:
        overrides["max_frames"] = frames
    if rate is not None:
        overrides["frame_rate_hz"] = rate
    if health is not None:
        overrides["demo_health"] = health
    if damage is not None:
        overrides["demo_damage"] = damage
    settings = Settings(**overrides)
    if verbose:
        typer.echo(settings.model_dump_json(indent=2))
    delivered = demo_app.run(settings=settings)
    typer.echo(f"Delivered {delivered} events")


@app.command("settings")
def show_settings() -> None:
    """Print the effective settings."""
    typer.echo(Settings().model_dump_json(indent=2))


if __name__ == "__main__":  # pragma: no cover
    app()
