from __future__ import annotations

import json
from typing import Any, Optional

import typer

from nameresolver.flows.export import export_bindings_flow
from nameresolver.loader import ClassLoadError, ClassLoader
from nameresolver.resolver import NameResolver, RegistryUnavailable, TypeMismatch
from nameresolver.utils import configure_logging
from nameresolver.utils.config import ConfigError, Settings, load_settings

app = typer.Typer(help="nameresolver CLI")

NOT_BOUND = "<not bound>"


@app.callback()
def main_options(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None, "--config", "-c", help="YAML settings file (env NAMERESOLVER_* overrides it)"
    ),
) -> None:
    try:
        settings = load_settings(config)
    except ConfigError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(code=2)
    configure_logging(settings.log_level)
    ctx.obj = {"settings": settings, "config": config}


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj["settings"]


def _fail(message: str) -> None:
    typer.echo(message, err=True)
    raise typer.Exit(code=1)


def _require_persistent(settings: Settings, command: str) -> None:
    if settings.backend == "memory":
        _fail(
            f"{command} needs a persistent backend; the memory registry only lives for "
            "one command (set backend: s3 or NAMERESOLVER_BACKEND=s3)"
        )


@app.command()
def lookup(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name to resolve, e.g. java:comp/env/service"),
    type_: Optional[str] = typer.Option(
        None, "--type", "-t", help="Expected class as module.Class (default: any object)"
    ),
    strict: bool = typer.Option(False, help="Fail instead of printing <not bound> on coercion errors"),
) -> None:
    """
    Resolve NAME and print the repr of the result.
    """
    target: Any = object
    if type_:
        try:
            target = ClassLoader().resolve_type(type_)
        except ClassLoadError as e:
            _fail(str(e))
    try:
        with NameResolver.from_settings(_settings(ctx)) as resolver:
            value = resolver.resolve(name, target, strict=strict)
    except (RegistryUnavailable, ClassLoadError, TypeMismatch) as e:
        _fail(f"{e.code}: {e}")
    typer.echo(NOT_BOUND if value is None else repr(value))


@app.command()
def bind(
    ctx: typer.Context,
    name: str = typer.Argument(...),
    value: str = typer.Argument(..., help="Value to bind; a class identifier is stored as text"),
    as_json: bool = typer.Option(False, "--json", help="Parse VALUE as JSON"),
) -> None:
    """Bind NAME to VALUE."""
    _require_persistent(_settings(ctx), "bind")
    payload: Any = value
    if as_json:
        try:
            payload = json.loads(value)
        except ValueError as e:
            _fail(f"VALUE is not valid JSON: {e}")
    try:
        with NameResolver.from_settings(_settings(ctx)) as resolver:
            resolver.bind(name, payload)
    except RegistryUnavailable as e:
        _fail(f"{e.code}: {e}")
    typer.echo(f"Bound {name}")


@app.command()
def unbind(ctx: typer.Context, name: str = typer.Argument(...)) -> None:
    _require_persistent(_settings(ctx), "unbind")
    try:
        with NameResolver.from_settings(_settings(ctx)) as resolver:
            resolver.unbind(name)
    except RegistryUnavailable as e:
        _fail(f"{e.code}: {e}")
    typer.echo(f"Unbound {name}")


@app.command("list")
def list_bindings(
    ctx: typer.Context,
    context: str = typer.Argument("", help="Context to list (default: root)"),
) -> None:
    """List the names bound directly under CONTEXT."""
    try:
        with NameResolver.from_settings(_settings(ctx)) as resolver:
            names = resolver.list(context)
    except RegistryUnavailable as e:
        _fail(f"{e.code}: {e}")
    for name in names:
        typer.echo(name)


@app.command()
def export(
    ctx: typer.Context,
    context: str = typer.Argument("", help="Context whose bindings are exported"),
    output_dir: str = typer.Option("./outputs", help="Directory to write results"),
    type_: Optional[str] = typer.Option(None, "--type", "-t", help="Expected class as module.Class"),
) -> None:
    """
    Run the Prefect flow that resolves every binding under CONTEXT.
    """
    result_path = export_bindings_flow(
        context=context,
        output_dir=output_dir,
        target=type_,
        config_path=ctx.obj["config"],
    )
    typer.echo(f"Results written to: {result_path}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
