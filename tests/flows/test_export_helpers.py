from __future__ import annotations

import json
from collections import OrderedDict
from pathlib import Path

from nameresolver import InMemoryRegistry, NameResolver
from nameresolver.flows import collect_bindings, write_report


def test_collect_bindings_reports_reprs() -> None:
    resolver = NameResolver(
        InMemoryRegistry(
            {
                "app/impl": "collections.OrderedDict",
                "app/port": 8080,
                "app/nested/skip": 1,
            }
        )
    )
    report = collect_bindings(resolver, "app", object)
    assert report == {"app/impl": "'collections.OrderedDict'", "app/port": "8080"}

    typed = collect_bindings(resolver, "app", dict)
    assert typed == {"app/impl": repr(OrderedDict())}


def test_write_report_creates_directory(tmp_path: Path) -> None:
    out = write_report(str(tmp_path / "out"), {"b": "2", "a": "1"})
    assert out == tmp_path / "out" / "bindings.json"
    assert json.loads(out.read_text(encoding="utf-8")) == {"a": "1", "b": "2"}
