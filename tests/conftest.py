from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

import pytest
import vdf

from geode_installer.backend.handlers import path_handler


@pytest.fixture(autouse=True)
def isolated_app_dirs(tmp_path: Path, monkeypatch):
    """Keep config, logs and Steam probing inside the test's temp dir."""
    monkeypatch.setenv("GEODE_INSTALLER_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("GEODE_INSTALLER_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.setattr(path_handler, "SYSTEM_STEAM_PATH", tmp_path / "usr-share-steam")
    yield
    app_logger = logging.getLogger("geode_installer")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def write_vdf() -> Callable[[Path, dict], Path]:
    def _write(path: Path, data: dict) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(vdf.dumps(data, pretty=True), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def steam_root(home: Path) -> Path:
    root = home / ".steam" / "steam"
    (root / "steamapps").mkdir(parents=True)
    return root


@pytest.fixture
def make_library(tmp_path: Path) -> Callable[[str], Path]:
    """Create an extra Steam library root and return its steamapps dir."""

    def _make(name: str) -> Path:
        steamapps = tmp_path / "libraries" / name / "steamapps"
        steamapps.mkdir(parents=True)
        return steamapps

    return _make


@pytest.fixture
def install_game(write_vdf) -> Callable[..., Path]:
    """Write an appmanifest into a steamapps dir and optionally create the game and prefix dirs."""

    def _install(
        steamapps: Path,
        app_id: str,
        installdir: str,
        create_game_dir: bool = True,
        create_prefix: bool = True,
    ) -> Path:
        write_vdf(
            steamapps / f"appmanifest_{app_id}.acf",
            {"AppState": {"appid": app_id, "name": installdir, "installdir": installdir}},
        )
        game_dir = steamapps / "common" / installdir
        if create_game_dir:
            game_dir.mkdir(parents=True)
        if create_prefix:
            (steamapps / "compatdata" / app_id / "pfx").mkdir(parents=True)
        return game_dir

    return _install


@pytest.fixture
def write_library_folders(write_vdf) -> Callable[[Path, list], Path]:
    def _write(steam_root: Path, library_roots: list, extra: Optional[dict] = None) -> Path:
        folders = {}
        for index, root in enumerate(library_roots):
            folders[str(index)] = {"path": str(root), "label": "", "apps": {"322170": "123"}}
        if extra:
            folders.update(extra)
        return write_vdf(steam_root / "steamapps" / "libraryfolders.vdf", {"libraryfolders": folders})

    return _write
