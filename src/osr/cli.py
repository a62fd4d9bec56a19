from __future__ import annotations

from pathlib import Path

import typer

from .config import DecodeConfig
from .decoder import decode_from_path
from .errors import ReplayDecodeError
from .types import Replay

app = typer.Typer(add_completion=False)


def _load(replay_file: Path) -> Replay:
    try:
        return decode_from_path(replay_file, config=DecodeConfig.from_env())
    except ReplayDecodeError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _format_optional(value: object) -> str:
    return "-" if value is None else str(value)


@app.command("info")
def cmd_info(
    replay_file: Path = typer.Argument(..., help="replay file path (.osr)"),
) -> None:
    """Print the replay header and score summary."""
    replay = _load(replay_file)
    game_mode = replay.game_mode
    mode_name = f"unknown({replay.mode})" if game_mode is None else game_mode.name.lower()
    played_at = replay.played_at

    typer.echo(f"mode: {mode_name}")
    typer.echo(f"version: {replay.version}")
    typer.echo(f"player: {replay.player_name}")
    typer.echo(f"beatmap_hash: {replay.beatmap_hash}")
    typer.echo(f"replay_hash: {replay.replay_hash}")
    typer.echo(
        "counts: "
        f"300={replay.count_300} 100={replay.count_100} 50={replay.count_50} "
        f"geki={replay.count_geki} katu={replay.count_katu} miss={replay.count_miss}"
    )
    typer.echo(f"score: {replay.score} max_combo: {replay.max_combo} perfect: {replay.perfect}")
    mod_names = ",".join(name.lower() for name in replay.mods.names()) or "none"
    typer.echo(f"mods: {mod_names} (0x{replay.mods.bits:08x})")
    unknown_mods = replay.mods.unknown_bits()
    if unknown_mods:
        typer.echo(f"unknown_mod_bits: 0x{unknown_mods:08x}")
    typer.echo(f"played_at: {_format_optional(None if played_at is None else played_at.isoformat())}")
    typer.echo(f"frames: {len(replay.frames)} duration_ms: {replay.duration}")
    typer.echo(f"lifebar_samples: {len(replay.lifebar)}")
    typer.echo(f"rng_seed: {_format_optional(replay.rng_seed)}")
    typer.echo(f"online_score_id: {_format_optional(replay.online_score_id)}")
    typer.echo(f"target_practice_accuracy: {_format_optional(replay.target_practice_accuracy)}")


@app.command("frames")
def cmd_frames(
    replay_file: Path = typer.Argument(..., help="replay file path (.osr)"),
    limit: int | None = typer.Option(None, help="print at most N frames (default: all)"),
) -> None:
    """Print decoded input frames as `time delta x y keys`."""
    replay = _load(replay_file)
    frames = replay.frames if limit is None else replay.frames[: max(0, int(limit))]
    for frame in frames:
        keys = ",".join(name.lower() for name in frame.keys.names()) or "-"
        typer.echo(f"{frame.time} {frame.delta} {frame.position.x:g} {frame.position.y:g} {keys}")


@app.command("lifebar")
def cmd_lifebar(
    replay_file: Path = typer.Argument(..., help="replay file path (.osr)"),
) -> None:
    """Print lifebar samples as `time percent`."""
    replay = _load(replay_file)
    for sample in replay.lifebar:
        typer.echo(f"{sample.time} {sample.percent:g}")


@app.command("dump")
def cmd_dump(
    replay_file: Path = typer.Argument(..., help="replay file path (.osr)"),
    out: Path | None = typer.Option(None, "--out", help="write JSON here instead of stdout"),
) -> None:
    """Export the decoded replay as JSON."""
    from .export import dump_json, dump_json_file

    replay = _load(replay_file)
    if out is None:
        typer.echo(dump_json(replay).decode("utf-8"))
        return
    dump_json_file(out, replay)
    typer.echo(f"wrote {out}")


def main(argv: list[str] | None = None) -> None:
    app(prog_name="osr", args=argv)


if __name__ == "__main__":
    main()
