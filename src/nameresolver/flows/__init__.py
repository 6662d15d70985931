"""Prefect flows built on the resolver."""

from .export import collect_bindings, export_bindings_flow, write_report

__all__ = ["export_bindings_flow", "collect_bindings", "write_report"]
