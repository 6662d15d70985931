from __future__ import annotations

import json
from pathlib import Path
from typing import Any, cast

from prefect import flow, get_run_logger, task

from nameresolver.loader import ClassLoader
from nameresolver.resolver import NameResolver
from nameresolver.utils.config import load_settings

REPORT_FILE = "bindings.json"


def collect_bindings(
    resolver: NameResolver, context: str, target_type: type[Any] = object
) -> dict[str, str]:
    """Resolve every binding under ``context`` into a name -> repr report."""
    resolved = resolver.resolve_all(context, target_type)
    return {name: repr(value) for name, value in sorted(resolved.items())}


def write_report(output_dir: str, report: dict[str, str]) -> Path:
    out_path = Path(output_dir)
    out_path.mkdir(parents=True, exist_ok=True)
    result_file = out_path / REPORT_FILE
    result_file.write_text(json.dumps(report, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    return result_file


@task
def resolve_context(context: str, target: str | None, config_path: str | None) -> dict[str, str]:
    logger = get_run_logger()
    settings = load_settings(config_path)
    target_type = ClassLoader().resolve_type(target) if target else object
    logger.info(f"Resolving bindings under '{context}' from the {settings.backend} registry")
    with NameResolver.from_settings(settings) as resolver:
        report = collect_bindings(resolver, context, target_type)
    logger.info(f"Resolved {len(report)} binding(s)")
    return report


@task
def export_results(output_dir: str, report: dict[str, str]) -> str:
    return str(write_report(output_dir, report))


@flow(name="nameresolver-export-bindings")
def export_bindings_flow(
    context: str,
    output_dir: str,
    target: str | None = None,
    config_path: str | None = None,
) -> str:
    """
    Resolves all bindings directly under a context and writes them as JSON:
    settings → registry → resolve → export
    """
    report = resolve_context(context, target, config_path)
    out = export_results(output_dir, report)
    return cast(str, out)
