from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table
import yaml

from paintpack import __version__
from paintpack.aspect import iter_classes, parse_aspect
from paintpack.config import default_config_path, load_config, write_default_config
from paintpack.errors import PaintpackError
from paintpack.service import PaintpackService
from paintpack.util.logging import setup_logging, use_color

app = typer.Typer(help="paintpack: crop photos into painting packs")


@dataclass(slots=True)
class AppState:
    service: PaintpackService
    console: Console
    config_path: Path


def _state(ctx: typer.Context) -> AppState:
    st = ctx.obj
    if not isinstance(st, AppState):
        raise RuntimeError("app state not initialized")
    return st


def _fail(console: Console, what: str, exc: Exception) -> typer.Exit:
    console.print(f"[red]{what} failed:[/red] {exc}")
    return typer.Exit(1)


def _emit_obj(console: Console, obj: dict[str, Any], json_out: bool) -> None:
    if json_out:
        typer.echo(json.dumps(obj, indent=2))
        return
    for k, v in obj.items():
        console.print(f"[bold]{k}[/bold]: {v}")


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[Path | None, typer.Option("--config", help="Config YAML path")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Verbose logging")] = False,
) -> None:
    setup_logging(verbose)
    cfg_path = config.expanduser() if config else default_config_path()
    if not cfg_path.exists():
        write_default_config(cfg_path)
    cfg = load_config(cfg_path)
    color_on = use_color()
    console = Console(color_system="auto" if color_on else None, force_terminal=color_on)
    if cfg.ui.show_banner:
        console.print(f"[bold cyan]paintpack[/bold cyan] [dim]{__version__}[/dim]")
    ctx.obj = AppState(
        service=PaintpackService(cfg),
        console=console,
        config_path=cfg_path,
    )


@app.command("init-config")
def init_config(
    ctx: typer.Context,
    path: Annotated[Path | None, typer.Option("--path", help="Write config to this path")] = None,
) -> None:
    st = _state(ctx)
    written = write_default_config(path.expanduser() if path else None)
    st.console.print(f"[green]config:[/green] {written}")


@app.command("sizes")
def sizes_cmd(
    ctx: typer.Context,
    json_out: Annotated[bool, typer.Option("--json")] = False,
) -> None:
    st = _state(ctx)
    rows = [
        {"aspect": a.value, "ratio": a.label, "sizes": [f"{w}x{h}" for w, h in a.sizes()]}
        for a in iter_classes()
    ]
    if json_out:
        typer.echo(json.dumps(rows, indent=2))
        return
    table = Table(title="aspect classes")
    table.add_column("aspect")
    table.add_column("ratio")
    table.add_column("sizes")
    for row in rows:
        table.add_row(row["aspect"], row["ratio"], ", ".join(row["sizes"]))
    st.console.print(table)


@app.command("geometry")
def geometry_cmd(
    ctx: typer.Context,
    width: Annotated[int, typer.Argument(min=0, help="Source width in pixels")],
    height: Annotated[int, typer.Argument(min=0, help="Source height in pixels")],
    json_out: Annotated[bool, typer.Option("--json")] = False,
) -> None:
    st = _state(ctx)
    crops = st.service.geometry(width, height)
    if json_out:
        typer.echo(json.dumps({a.value: list(r.as_tuple()) for a, r in crops.items()}, indent=2))
        return
    table = Table(title=f"crops for {width}x{height}")
    for col in ("aspect", "x", "y", "width", "height"):
        table.add_column(col)
    for aspect, rect in crops.items():
        table.add_row(aspect.value, *(str(v) for v in rect.as_tuple()))
    st.console.print(table)


@app.command("preview")
def preview_cmd(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="Source image")],
    aspect: Annotated[str | None, typer.Option("--aspect", help="Only this aspect class")] = None,
    json_out: Annotated[bool, typer.Option("--json")] = False,
) -> None:
    st = _state(ctx)
    try:
        if aspect:
            target = parse_aspect(aspect)
            rows = [{"aspect": target.value, "data_uri": st.service.preview(path, target)}]
        else:
            rows = st.service.load_previews(path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    except PaintpackError as exc:
        raise _fail(st.console, "preview", exc) from exc

    if json_out:
        typer.echo(json.dumps(rows, indent=2))
        return
    for row in rows:
        typer.echo(f"{row['aspect']}\t{row['data_uri']}")


@app.command("crop")
def crop_cmd(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="Image to crop in place")],
    x: Annotated[int, typer.Argument(min=0)],
    y: Annotated[int, typer.Argument(min=0)],
    width: Annotated[int, typer.Argument(min=1)],
    height: Annotated[int, typer.Argument(min=1)],
    json_out: Annotated[bool, typer.Option("--json")] = False,
) -> None:
    st = _state(ctx)
    try:
        rect = st.service.crop_image(path, x, y, width, height)
    except PaintpackError as exc:
        raise _fail(st.console, "crop", exc) from exc
    _emit_obj(st.console, {"path": str(path), "crop": list(rect.as_tuple())}, json_out)


@app.command("export")
def export_cmd(
    ctx: typer.Context,
    pack_file: Annotated[Path, typer.Argument(help="Pack YAML with metadata and items")],
    out: Annotated[Path | None, typer.Option("--out", help="Export root directory")] = None,
    json_out: Annotated[bool, typer.Option("--json")] = False,
) -> None:
    st = _state(ctx)
    try:
        loaded = st.service.load_pack_file(pack_file.expanduser())
    except (OSError, ValueError, KeyError, yaml.YAMLError) as exc:
        raise _fail(st.console, "loading pack file", exc) from exc
    try:
        result = st.service.export(out.expanduser() if out else None)
    except PaintpackError as exc:
        raise _fail(st.console, "export", exc) from exc

    payload = {
        "pack_dir": str(result.pack_dir),
        "manifest": str(result.manifest_path),
        "items": loaded,
        "images": len(result.images),
    }
    _emit_obj(st.console, payload, json_out)


if __name__ == "__main__":
    app()
