"""Command-line interface for canvasfx.

Inspects the resolution catalog, synthesizes field schemas from default
configurations, and rescales saved effect lists to a new canvas.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
import sys
from typing import Any

from rich.console import Console
from rich.table import Table

from canvasfx.core.config import AppConfig, configure_logging, load_app_config
from canvasfx.core.effects import Effect
from canvasfx.core.resolution import (
    ResolutionCategory,
    UnknownResolutionError,
    by_category,
    display_name,
    get_dimensions,
    get_profile,
    list_profiles,
)
from canvasfx.core.scaling import rescale_for_resolution
from canvasfx.core.schema import EffectSchemaService, FieldSchema
from canvasfx.core.utils.json import read_json, require_object, write_json

console = Console()
logger = logging.getLogger(__name__)


class FileConfigAuthority:
    """Serves default configurations from a JSON file.

    The file is either a single default instance, served under
    ``effect_id``, or an object mapping effect ids to default instances.
    """

    def __init__(self, path: Path, *, catalog: bool) -> None:
        self._path = path
        self._catalog = catalog

    async def get_default_config(self, effect_id: str) -> dict[str, Any]:
        data = require_object(read_json(self._path), self._path)
        if not self._catalog:
            return data
        if effect_id not in data:
            raise KeyError(f"Effect {effect_id!r} not found in {self._path}")
        return data[effect_id]


def _load_config(args: argparse.Namespace) -> AppConfig:
    app_config = load_app_config(args.app_config)
    if args.verbose:
        app_config = app_config.model_copy(
            update={"logging": app_config.logging.model_copy(update={"level": "DEBUG"})}
        )
    configure_logging(app_config)
    return app_config


def show_dimensions(args: argparse.Namespace) -> int:
    """Print the canvas size of a resolution in the requested orientation."""
    try:
        dims = get_dimensions(args.key, is_horizontal=not args.vertical)
        profile = get_profile(args.key)
    except UnknownResolutionError as e:
        console.print(f"[red]ERROR: {e.args[0]}[/red]")
        return 1

    orientation = "portrait" if args.vertical else "landscape"
    console.print(f"[bold]{dims.width}x{dims.height}[/bold] {orientation}")
    console.print(f"   {display_name(profile.key)}, category {profile.category.value}")
    return 0


def list_resolutions(args: argparse.Namespace) -> int:
    """Print the resolution catalog, optionally filtered by category."""
    profiles = list_profiles()
    if args.category:
        try:
            category = ResolutionCategory(args.category)
        except ValueError:
            names = ", ".join(c.value for c in ResolutionCategory)
            console.print(f"[red]ERROR: Unknown category {args.category!r} (one of: {names})[/red]")
            return 1
        profiles = by_category(category)

    table = Table(title="Resolutions")
    table.add_column("Key", justify="right")
    table.add_column("Size")
    table.add_column("Name")
    table.add_column("Category")
    for profile in profiles:
        table.add_row(
            str(profile.key),
            f"{profile.width}x{profile.height}",
            profile.display_name,
            profile.category.value,
        )
    console.print(table)
    return 0


def _constraint_text(field: FieldSchema) -> str:
    c = field.constraints
    if c is None:
        return ""
    if c.options is not None:
        return f"{len(c.options)} options"
    return f"{c.min}..{c.max} step {c.step}"


async def show_schema_async(
    path: Path, effect_id: str, catalog: bool, app_config: AppConfig
) -> int:
    """Synthesize and print the field schema of one effect.

    Args:
        path: JSON file holding default configuration(s)
        effect_id: Effect to describe
        catalog: Whether the file maps effect ids to defaults
        app_config: Application configuration

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    service = EffectSchemaService(
        FileConfigAuthority(path, catalog=catalog), app_config.schema_options
    )
    try:
        schema = await service.get_schema(effect_id)
    except (KeyError, ValueError, TypeError) as e:
        console.print(f"[red]ERROR: Could not build schema: {e}[/red]")
        return 1

    table = Table(title=f"Schema: {schema.effect_id}")
    table.add_column("Property")
    table.add_column("Label")
    table.add_column("Kind")
    table.add_column("Constraints")
    for field in schema.fields:
        kind = f"{field.kind.value} (read-only)" if field.read_only else field.kind.value
        table.add_row(field.name, field.label, kind, _constraint_text(field))
    console.print(table)
    return 0


def show_schema(args: argparse.Namespace) -> int:
    app_config = _load_config(args)
    path = Path(args.defaults).resolve()
    if not path.exists():
        console.print(f"[red]ERROR: Defaults file not found: {path}[/red]")
        return 1

    effect_id = args.effect or path.stem
    return asyncio.run(
        show_schema_async(path, effect_id, catalog=args.effect is not None, app_config=app_config)
    )


def rescale_project(args: argparse.Namespace) -> int:
    """Rescale a saved project (or bare effect list) to a new resolution.

    A bare effect list is written back as a list; a project object keeps
    its other keys and gets its target resolution updated.
    """
    app_config = _load_config(args)
    project_path = Path(args.project).resolve()
    if not project_path.exists():
        console.print(f"[red]ERROR: Project file not found: {project_path}[/red]")
        return 1

    try:
        data = read_json(project_path)
        bare_list = isinstance(data, list)
        project = {"effects": data} if bare_list else require_object(data, project_path)
    except ValueError as e:
        console.print(f"[red]ERROR: Could not read project: {e}[/red]")
        return 1

    try:
        effects = [Effect.from_wire(e) for e in project.get("effects", [])]
        scaled = rescale_for_resolution(
            effects,
            args.from_key,
            not args.from_vertical,
            args.to_key,
            not args.to_vertical,
            options=app_config.scaling.to_options(),
        )
    except UnknownResolutionError as e:
        console.print(f"[red]ERROR: {e.args[0]}[/red]")
        return 1
    except (TypeError, ValueError) as e:  # includes pydantic ValidationError
        console.print(f"[red]ERROR: Invalid effect list: {e}[/red]")
        return 1

    new_key = get_profile(args.to_key).key
    wire_effects = [e.to_wire() for e in scaled]
    output: Any = wire_effects
    if not bare_list:
        output = {
            **project,
            "targetResolution": new_key,
            "isHorizontal": not args.to_vertical,
            "effects": wire_effects,
        }
    out_path = Path(args.out).resolve() if args.out else project_path
    write_json(out_path, output)

    dims = get_dimensions(new_key, not args.to_vertical)
    changed = sum(1 for old, new in zip(effects, scaled, strict=True) if old is not new)
    console.print(
        f"[green]Rescaled {changed}/{len(scaled)} effects to {dims.width}x{dims.height}[/green]"
    )
    console.print(f"[green]Saved:[/green] {out_path}")
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="canvasfx",
        description="canvasfx - effect configuration tooling",
    )
    p.add_argument(
        "--app-config",
        default=None,
        help="Path to app config JSON/YAML (default: canvasfx.json if present)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    dims = sub.add_parser("dimensions", help="Show canvas size for a resolution")
    dims.add_argument("key", help="Resolution key or alias (e.g. 1920, 1080p, 4k)")
    dims.add_argument("--vertical", action="store_true", help="Portrait orientation")

    res = sub.add_parser("resolutions", help="List known resolutions")
    res.add_argument("--category", help="Only list this category (e.g. HD, Mobile)")

    schema = sub.add_parser("schema", help="Synthesize the field schema of an effect")
    schema.add_argument("defaults", help="JSON file with a default configuration")
    schema.add_argument(
        "--effect",
        default=None,
        help="Effect id when the file maps effect ids to default configurations",
    )

    rescale = sub.add_parser("rescale", help="Rescale a project to a new resolution")
    rescale.add_argument("project", help="Project JSON with an 'effects' list")
    rescale.add_argument("--from", dest="from_key", required=True, help="Current resolution")
    rescale.add_argument("--to", dest="to_key", required=True, help="Target resolution")
    rescale.add_argument("--from-vertical", action="store_true", help="Current canvas is portrait")
    rescale.add_argument("--to-vertical", action="store_true", help="Target canvas is portrait")
    rescale.add_argument("-o", "--out", default=None, help="Output path (default: overwrite)")

    return p


def main(argv: list[str] | None = None) -> None:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)

    handlers = {
        "dimensions": show_dimensions,
        "resolutions": list_resolutions,
        "schema": show_schema,
        "rescale": rescale_project,
    }
    sys.exit(handlers[args.cmd](args))
