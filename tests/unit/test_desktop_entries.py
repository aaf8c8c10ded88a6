"""
Unit tests for the desktop entry index

Tests verify:
- Location discovery order, de-duplication and existence checks
- Only .desktop files are indexed
- The process-wide index is built once
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from session_restore.find_command import desktop_entries
from session_restore.find_command.desktop_entries import (
    DesktopEntryIndex,
    desktop_entry_locations,
    get_default_index,
    list_desktop_files,
)


class TestDesktopEntryLocations:
    """Applications directory discovery."""

    def test_data_home_first_then_existing_data_dirs(self, data_tree):
        locations = desktop_entry_locations(data_tree["data_home"], data_tree["data_dirs"])

        assert locations == (
            data_tree["user_apps"],
            data_tree["system_apps"],
            data_tree["flatpak_apps"],
        )

    def test_missing_directories_skipped(self, tmp_path):
        assert desktop_entry_locations(tmp_path / "nope", [tmp_path / "also-nope"]) == ()

    def test_duplicates_removed(self, data_tree):
        # pyxdg lists the data home among the data dirs as well
        locations = desktop_entry_locations(
            data_tree["data_home"],
            [data_tree["data_home"], *data_tree["data_dirs"]],
        )

        assert locations.count(data_tree["user_apps"]) == 1

    def test_defaults_from_pyxdg(self, data_tree):
        with patch.object(desktop_entries.BaseDirectory, "xdg_data_home", str(data_tree["data_home"])), \
                patch.object(desktop_entries.BaseDirectory, "xdg_data_dirs", [str(data_tree["data_dirs"][0])]):
            locations = desktop_entry_locations()

        assert locations == (data_tree["user_apps"], data_tree["system_apps"])


class TestDesktopEntryIndex:
    """Indexed desktop files."""

    def test_only_desktop_files_indexed(self, index, data_tree):
        names = {path.name for path in index.desktop_files}

        assert "mimeinfo.cache" not in names
        assert names == {
            "tidal.desktop",
            "net.lutris.multimc-2.desktop",
            "firefox.desktop",
            "org.gnome.Terminal.desktop",
            "com.jetbrains.CLion.desktop",
            "org.mozilla.firefox.desktop",
        }

    def test_files_listed_in_location_order(self, index, data_tree):
        parents = [path.parent for path in index.desktop_files]
        assert parents == sorted(parents, key=list(index.locations).index)

    def test_stem_case_preserved(self, index):
        stems = {path.stem for path in index.desktop_files}
        assert "com.jetbrains.CLion" in stems

    def test_system_directory(self, index, data_tree):
        assert index.system_directory == data_tree["system_apps"]

    def test_index_is_immutable(self, index):
        with pytest.raises(AttributeError):
            index.desktop_files = ()

    def test_from_locations_enumerates_given_directories(self, data_tree):
        index = DesktopEntryIndex.from_locations([data_tree["flatpak_apps"]])

        assert [path.stem for path in index.desktop_files] == [
            "com.jetbrains.CLion",
            "org.mozilla.firefox",
        ]
        assert index.system_directory == Path("/usr/share/applications")

    def test_unreadable_location_skipped(self, tmp_path):
        assert list_desktop_files([tmp_path / "vanished"]) == ()


class TestDefaultIndex:
    """Process-wide index."""

    def test_built_once(self, monkeypatch, index):
        monkeypatch.setattr(desktop_entries, "_default_index", None)

        with patch.object(DesktopEntryIndex, "discover", return_value=index) as mock_discover:
            first = get_default_index()
            second = get_default_index()

        assert first is second is index
        mock_discover.assert_called_once()
