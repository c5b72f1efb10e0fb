"""
Shared test fixtures for the deskbar test suite.

Provides desktop files, application directories and settings files that
use real file I/O (no mocking of the filesystem).
"""

from pathlib import Path

import pytest
import toml

from deskbar.apps.desktop_entry import ApplicationEntry


def render_desktop_file(**keys) -> str:
    """Render a [Desktop Entry] group; None values are left out."""
    lines = ["[Desktop Entry]", "Type=Application"]
    for key, value in keys.items():
        if value is not None:
            lines.append(f"{key}={value}")
    return "\n".join(lines) + "\n"


def make_app(name, exec_str=None, icon=None, categories=()):
    """Create an ApplicationEntry directly, without a file."""
    return ApplicationEntry(
        name=name,
        exec=exec_str or name.lower().replace(" ", "-"),
        icon=icon,
        categories=tuple(categories),
    )


@pytest.fixture(autouse=True)
def _plain_locale(monkeypatch):
    """Keep the host locale from leaking into name lookups."""
    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def write_desktop(tmp_path):
    """Factory that writes a desktop file and returns its path."""
    def _write(directory: Path, filename: str, **keys) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / filename
        path.write_text(render_desktop_file(**keys), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def app_dirs(tmp_path, write_desktop):
    """
    Create system, local and user application directories.

    Layout:
        system: firefox, gimp, hidden (NoDisplay), broken (no Exec)
        local:  code
        user:   Firefox override (duplicate name), notes.txt
    """
    system = tmp_path / "usr" / "share" / "applications"
    local = tmp_path / "usr" / "local" / "share" / "applications"
    user = tmp_path / "home" / ".local" / "share" / "applications"

    write_desktop(system, "firefox.desktop", Name="Firefox", Exec="firefox %u",
                  Icon="firefox", Categories="Network;WebBrowser;")
    write_desktop(system, "gimp.desktop", Name="GIMP", Exec="gimp-2.10 %U",
                  Icon="gimp", Categories="Graphics;2DGraphics;")
    write_desktop(system, "hidden.desktop", Name="Hidden Helper",
                  Exec="hidden-helper", NoDisplay="true")
    write_desktop(system, "broken.desktop", Name="No Exec")
    write_desktop(local, "code.desktop", Name="code", Exec="code --new-window %F",
                  Categories="Development;IDE;")
    write_desktop(user, "firefox.desktop", Name="Firefox", Exec="firefox-nightly %u",
                  Categories="Network;")
    (user / "notes.txt").write_text("Name=Not an app\n")

    return [system, local, user]


@pytest.fixture
def tmp_settings(tmp_path):
    """Create a real settings TOML file with all sections."""
    settings_path = tmp_path / "settings.toml"
    data = {
        "menu": {"category_limit": 8, "policy": "single"},
        "search": {"max_results": 20},
    }
    settings_path.write_text(toml.dumps(data))
    return settings_path
