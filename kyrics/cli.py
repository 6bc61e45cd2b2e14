from __future__ import annotations

from dataclasses import replace
import json
from pathlib import Path
from typing import NoReturn

import typer

from kyrics.app import preview as preview_loop
from kyrics.config import load_config, load_preview_config
from kyrics.export import export_json, export_lrc, export_srt
from kyrics.logging_setup import setup_logging
from kyrics.parser import Failure, LyricsFormat, ParseResult, detect_format, parse, parse_file
from kyrics.state.calculator import calculate_state


app = typer.Typer(no_args_is_help=True, add_completion=False)

_FORMATS = {
    "auto": None,
    "ttml": LyricsFormat.TTML,
    "lrc": LyricsFormat.LRC,
}


def _load(path: Path, fmt: str) -> ParseResult:
    fmt_l = fmt.lower()
    if fmt_l not in _FORMATS:
        raise typer.BadParameter("format must be one of: auto, ttml, lrc")
    text = path.read_text(encoding="utf-8")
    if _FORMATS[fmt_l] is None:
        return parse_file(text, path.name)
    return parse(text, _FORMATS[fmt_l])


def _fail(res: Failure) -> NoReturn:
    typer.echo(f"Error: {res.error}", err=True)
    raise typer.Exit(code=1)


@app.command()
def detect(path: Path):
    """Print the lyrics format detected from file content."""
    typer.echo(detect_format(path.read_text(encoding="utf-8")).value)


@app.command("parse")
def parse_cmd(
    path: Path,
    fmt: str = typer.Option("auto", "--format", help="auto|ttml|lrc"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Parse a lyrics file and print stats."""
    setup_logging(debug)
    res = _load(path, fmt)
    if isinstance(res, Failure):
        _fail(res)
    main = [ln for ln in res.lines if not ln.is_accompaniment]
    typer.echo(f"format={res.format.value}")
    typer.echo(f"lines_total={len(res.lines)}")
    typer.echo(f"main_lines={len(main)}")
    typer.echo(f"accompaniment_lines={len(res.lines) - len(main)}")
    typer.echo(f"syllables_total={sum(len(ln.syllables) for ln in res.lines)}")
    if res.lines:
        typer.echo(f"span_ms={res.lines[0].start}..{max(ln.end for ln in res.lines)}")
    meta = res.metadata
    for key in ("title", "artist", "album", "duration_ms", "offset_ms"):
        value = getattr(meta, key)
        if value is not None:
            typer.echo(f"{key}={value}")
    for w in res.warnings:
        typer.echo(f"warning: {w}", err=True)


@app.command()
def state(
    path: Path,
    at: int = typer.Option(0, "--at", help="Playback position (ms)"),
    fmt: str = typer.Option("auto", "--format", help="auto|ttml|lrc"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Print the computed line states at a playback position."""
    res = _load(path, fmt)
    if isinstance(res, Failure):
        _fail(res)
    st = calculate_state(res.lines, at, load_config())

    if json_output:
        typer.echo(
            json.dumps(
                {
                    "current_time_ms": st.current_time_ms,
                    "current_line_index": st.current_line_index,
                    "lines": [
                        {
                            "index": i,
                            "text": ln.text,
                            "is_playing": ls.is_playing,
                            "has_played": ls.has_played,
                            "is_upcoming": ls.is_upcoming,
                            "distance": ls.distance_from_current,
                            "opacity": round(ls.opacity, 3),
                            "scale": ls.scale,
                            "blur_radius": ls.blur_radius,
                        }
                        for i, ln in enumerate(st.lines)
                        for ls in (st.get_line_state(i),)
                    ],
                },
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    typer.echo(f"t={st.current_time_ms}ms current={st.current_line_index}")
    for i, ln in enumerate(st.lines):
        ls = st.get_line_state(i)
        mark = ">" if ls.is_playing else ("-" if ls.has_played else " ")
        typer.echo(
            f"{mark} {i:3d} d={ls.distance_from_current:<3d} op={ls.opacity:.2f} "
            f"sc={ls.scale:.2f} blur={ls.blur_radius:.1f}  {ln.text}"
        )


@app.command()
def export(
    path: Path,
    to: str = typer.Option("json", "--to", case_sensitive=False, help="json|lrc|elrc|srt"),
    fmt: str = typer.Option("auto", "--format", help="Input format: auto|ttml|lrc"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
):
    """Convert a lyrics file to JSON, LRC, Enhanced LRC or SRT."""
    res = _load(path, fmt)
    if isinstance(res, Failure):
        _fail(res)
    to_l = to.lower()
    if to_l == "json":
        data = export_json(res.lines, res.metadata)
    elif to_l == "lrc":
        data = export_lrc(res.lines, res.metadata)
    elif to_l == "elrc":
        data = export_lrc(res.lines, res.metadata, enhanced=True)
    elif to_l == "srt":
        data = export_srt(res.lines)
    else:
        raise typer.BadParameter("--to must be one of: json, lrc, elrc, srt")

    if out:
        out.write_text(data, encoding="utf-8")
    else:
        typer.echo(data, nl=False)


@app.command()
def preview(
    path: Path,
    fmt: str = typer.Option("auto", "--format", help="auto|ttml|lrc"),
    start: int = typer.Option(0, "--start", help="Start position (ms)"),
    speed: float = typer.Option(1.0, "--speed", help="Playback speed multiplier"),
    context_lines: int | None = typer.Option(None, "--context", help="Lines above current"),
    no_alt_screen: bool = typer.Option(False, "--no-alt-screen", help="Do not use alternate screen buffer"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """
    Preview synced lyrics in the terminal against a simulated clock.
    """
    setup_logging(debug)
    res = _load(path, fmt)
    if isinstance(res, Failure):
        _fail(res)

    preview_cfg = load_preview_config()
    if context_lines is not None:
        preview_cfg = replace(preview_cfg, context_lines=context_lines)
    if no_alt_screen:
        preview_cfg = replace(preview_cfg, use_alt_screen=False)

    title = " - ".join(v for v in (res.metadata.artist, res.metadata.title) if v) or path.name
    try:
        preview_loop(
            res.lines,
            title=title,
            preview_cfg=preview_cfg,
            config=load_config(),
            start_ms=start,
            speed=speed,
        )
    except KeyboardInterrupt:
        raise typer.Exit(code=130)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
