"""
Tests for LibraryUpdater.
"""

import json

import pytest

from libbundles import DownloadOutcome, LibraryStatus, UnknownLibraryException
from tests.test_utils import FakeSession, build_library_archive, create_test_context, snapshot, write_marker


class TestUpdate:
    def test_outdated_library_becomes_current(self, tmp_path):
        """Test that an update replaces an outdated installation."""
        session = FakeSession(body=build_library_archive("lib_widgets-3.1", "3.1"))
        with create_test_context(tmp_path, session, versions={"lib_widgets": "3.1"}) as context:
            write_marker(context.install_dir, "3.0")
            (context.install_dir / "obsolete.php").write_text("<?php")
            assert context.manager.resolve_status("Widgets") == LibraryStatus.OUTDATED

            assert context.manager.update("Widgets") == DownloadOutcome.DOWNLOADED

            assert context.manager.resolve_status("Widgets") == LibraryStatus.CURRENT
            assert not (context.install_dir / "obsolete.php").exists()
            marker = json.loads((context.install_dir / "version.json").read_text())
            assert marker["version"] == "3.1"

    def test_current_library_stays_current(self, tmp_path):
        """Test updating a current library."""
        session = FakeSession(body=build_library_archive("lib_widgets-3.0", "3.0"))
        with create_test_context(tmp_path, session) as context:
            context.manager.download("Widgets")
            assert context.manager.update("Widgets") == DownloadOutcome.DOWNLOADED
            assert context.manager.resolve_status("Widgets") == LibraryStatus.CURRENT
        assert [method for method, _, _ in session.calls] == ["HEAD", "GET", "HEAD", "GET"]

    def test_failed_update_keeps_previous_install(self, tmp_path):
        """Test that a failed update keeps the previous installation."""
        session = FakeSession(head_status=404)
        with create_test_context(tmp_path, session, versions={"lib_widgets": "3.1"}) as context:
            write_marker(context.install_dir, "3.0")
            before = snapshot(context.install_dir)

            assert context.manager.update("Widgets") == DownloadOutcome.SOURCE_UNREACHABLE

            assert snapshot(context.install_dir) == before
            assert context.manager.resolve_status("Widgets") == LibraryStatus.OUTDATED

    def test_broken_archive_keeps_previous_install(self, tmp_path):
        """Test that a broken archive keeps the previous installation."""
        session = FakeSession(body=b"not a zip")
        with create_test_context(tmp_path, session, versions={"lib_widgets": "3.1"}) as context:
            write_marker(context.install_dir, "3.0")

            assert context.manager.update("Widgets") == DownloadOutcome.ARCHIVE_EMPTY
            assert context.manager.resolve_status("Widgets") == LibraryStatus.OUTDATED
            assert [p.name for p in context.install_dir.parent.iterdir()] == ["widgets"]

    def test_update_of_missing_library_installs_it(self, tmp_path):
        """Test updating a library that is not installed."""
        session = FakeSession(body=build_library_archive("lib_widgets-3.0", "3.0"))
        with create_test_context(tmp_path, session) as context:
            assert context.manager.update("Widgets") == DownloadOutcome.DOWNLOADED
            assert context.manager.resolve_status("Widgets") == LibraryStatus.CURRENT

    def test_unknown_library(self, tmp_path):
        """Test that unknown libraries raise without side effects."""
        session = FakeSession()
        with create_test_context(tmp_path, session) as context:
            with pytest.raises(UnknownLibraryException):
                context.manager.update("Gadgets")
        assert session.calls == []
        assert list(tmp_path.iterdir()) == []

    def test_update_outdated(self, tmp_path):
        """Test updating every outdated library."""
        session = FakeSession(body=build_library_archive("lib_widgets-3.1", "3.1"))
        with create_test_context(tmp_path, session, versions={"lib_widgets": "3.1"}) as context:
            write_marker(context.install_dir, "3.0")
            assert context.manager.update_outdated() == {"Widgets": DownloadOutcome.DOWNLOADED}
            assert context.manager.update_outdated() == {}
