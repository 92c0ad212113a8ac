from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from depmirror.utils.console import reconfigure_console

CRATES_IO = "registry+https://github.com/rust-lang/crates.io-index"


def _registry_id(name: str, version: str) -> str:
    return f"{name} {version} ({CRATES_IO})"


def _package(
    name: str,
    version: str,
    *,
    source: Optional[str] = CRATES_IO,
    dependencies: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    pkg_id = _registry_id(name, version) if source else f"{name} {version} (path+file:///ws/{name})"
    return {
        "name": name,
        "version": version,
        "id": pkg_id,
        "source": source,
        "dependencies": dependencies or [],
    }


def _declared(name: str, req: str, kind: Optional[str] = None) -> Dict[str, Any]:
    return {"name": name, "req": req, "kind": kind, "rename": None, "source": CRATES_IO}


def _edge(pkg: Dict[str, Any], *kinds: Optional[str]) -> Dict[str, Any]:
    return {
        "name": pkg["name"].replace("-", "_"),
        "pkg": pkg["id"],
        "dep_kinds": [{"kind": kind, "target": None} for kind in (kinds or (None,))],
    }


@pytest.fixture
def cargo_metadata() -> Dict[str, Any]:
    """A ``cargo metadata`` document for a two-crate workspace.

    Runtime graph: app -> serde, tokio, util(path); util -> itoa, serde.
    app also has a dev dependency (criterion) and a build dependency (cc).
    """
    serde = _package("serde", "1.0.210")
    tokio = _package("tokio", "1.40.0")
    itoa = _package("itoa", "2.0.0")
    criterion = _package("criterion", "0.5.1")
    cc = _package("cc", "1.1.0")
    util = _package(
        "util",
        "0.1.0",
        source=None,
        dependencies=[_declared("itoa", "^2"), _declared("serde", "^1.0.100")],
    )
    app = _package(
        "app",
        "0.1.0",
        source=None,
        dependencies=[
            _declared("serde", "^1.0.200"),
            _declared("tokio", "^1"),
            _declared("criterion", "^0.5", kind="dev"),
            _declared("cc", "^1", kind="build"),
            {"name": "util", "req": "*", "kind": None, "rename": None, "source": None},
        ],
    )
    packages = [app, util, serde, tokio, itoa, criterion, cc]

    nodes = [
        {
            "id": app["id"],
            "deps": [
                _edge(serde),
                _edge(tokio),
                _edge(criterion, "dev"),
                _edge(cc, "build"),
                _edge(util),
            ],
        },
        {"id": util["id"], "deps": [_edge(serde), _edge(itoa)]},
    ] + [{"id": pkg["id"], "deps": []} for pkg in (serde, tokio, itoa, criterion, cc)]

    return {
        "version": 1,
        "packages": packages,
        "workspace_members": [app["id"]],
        "resolve": {"nodes": nodes, "root": app["id"]},
    }


@pytest.fixture
def metadata_file(tmp_path: Path, cargo_metadata: Dict[str, Any]) -> Path:
    """The ``cargo_metadata`` document saved as a JSON export."""
    path = tmp_path / "metadata.json"
    path.write_text(json.dumps(cargo_metadata), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def reset_console(monkeypatch: pytest.MonkeyPatch):
    """Give every test a fresh, colourless console."""
    monkeypatch.setenv("NO_COLOR", "1")
    reconfigure_console()
    yield
    reconfigure_console()
