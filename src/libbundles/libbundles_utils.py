"""
This file contains various utility functions like I/O operations, handling paths, etc.
"""

import logging
import os
import pathlib
import shutil
import uuid
import zipfile
from typing import Optional

import requests

from libbundles.libbundles_exceptions import LibbundlesException
from libbundles.libbundles_logger import LibbundlesLogger

REDIRECT_STATUS_CODES = frozenset({301, 302, 303, 307, 308})


class HttpUtils:
    """
    Utility functions for the HTTP side of a download
    """

    @staticmethod
    def check_redirect(
        session: requests.Session, url: str, verify: bool, timeout: float
    ) -> bool:
        """
        Issue a HEAD request without following redirects.

        Archive hosts answer a valid archive URL with a redirect to the actual
        file, so a redirect status is taken as the signal that the archive exists.
        """
        response = session.head(
            url, allow_redirects=False, verify=verify, timeout=timeout
        )
        try:
            return response.status_code in REDIRECT_STATUS_CODES
        finally:
            response.close()

    @staticmethod
    def download_file(
        logger: LibbundlesLogger,
        session: requests.Session,
        url: str,
        target_path: pathlib.Path,
        verify: bool,
        timeout: float,
    ) -> int:
        """
        Stream the file at url into target_path, replacing any existing file.

        The body is written to a `.part` sibling first and moved into place only
        when the transfer is complete. When the server announces a Content-Length,
        the number of received bytes must match it.

        Returns:
            The number of bytes written

        Raises:
            requests.RequestException: On HTTP or connection errors
            LibbundlesException: If the transfer is truncated
        """
        target_path.parent.mkdir(parents=True, exist_ok=True)
        part_path = target_path.with_name(target_path.name + ".part")

        response = session.get(
            url, stream=True, allow_redirects=True, verify=verify, timeout=timeout
        )
        try:
            response.raise_for_status()
            expected = response.headers.get("Content-Length")
            written = 0
            with open(part_path, "wb") as f:
                for chunk in response.iter_content(chunk_size=1024 * 64):
                    if chunk:
                        f.write(chunk)
                        written += len(chunk)
        except BaseException:
            FileUtils.remove_file(part_path)
            raise
        finally:
            response.close()

        if expected is not None and expected.isdigit() and int(expected) != written:
            FileUtils.remove_file(part_path)
            raise LibbundlesException(
                f"Incomplete download from {url}: expected {expected} bytes, received {written}"
            )

        os.replace(part_path, target_path)
        logger.log(f"Saved {written} bytes from {url} to {target_path}", logging.DEBUG)
        return written


class FileUtils:
    """
    Utility functions for archives and directories
    """

    @staticmethod
    def remove_file(path: pathlib.Path) -> None:
        if path.exists():
            path.unlink()

    @staticmethod
    def is_non_empty_file(path: pathlib.Path) -> bool:
        return path.is_file() and path.stat().st_size > 0

    @staticmethod
    def extract_archive_folder(
        archive_path: pathlib.Path, folder_name: str, target_dir: pathlib.Path
    ) -> bool:
        """
        Extract the members of the top-level folder `folder_name` of a zip archive
        into target_dir, stripping the folder prefix.

        Returns:
            False if the archive has no member under folder_name

        Raises:
            LibbundlesException: If the archive is not a valid zip or a member
                would be written outside target_dir
        """
        prefix = folder_name.rstrip("/") + "/"
        base = target_dir.resolve()
        found = False

        try:
            archive = zipfile.ZipFile(archive_path, "r")
        except zipfile.BadZipFile as e:
            raise LibbundlesException(f"Not a zip archive: {archive_path}") from e

        with archive:
            for info in archive.infolist():
                if not info.filename.startswith(prefix):
                    continue
                found = True
                relative = info.filename[len(prefix):]
                if not relative:
                    continue

                target = (base / relative).resolve()
                if target != base and not str(target).startswith(str(base) + os.sep):
                    raise LibbundlesException(
                        f"Archive contains an invalid path entry: {info.filename!r}"
                    )

                if info.is_dir():
                    target.mkdir(parents=True, exist_ok=True)
                    continue

                target.parent.mkdir(parents=True, exist_ok=True)
                with archive.open(info, "r") as src, open(target, "wb") as out:
                    shutil.copyfileobj(src, out)

        return found

    @staticmethod
    def create_staging_directory(install_dir: pathlib.Path) -> pathlib.Path:
        """Create an empty directory next to install_dir, on the same filesystem."""
        install_dir.parent.mkdir(parents=True, exist_ok=True)
        staging = install_dir.with_name(f".{install_dir.name}.staging-{uuid.uuid4().hex[:8]}")
        staging.mkdir()
        return staging

    @staticmethod
    def swap_directory(staging_dir: pathlib.Path, install_dir: pathlib.Path) -> None:
        """
        Move staging_dir to install_dir, replacing install_dir if it exists.

        The previous directory is kept as a backup until the new one is in place
        and is restored if the move fails.
        """
        backup: Optional[pathlib.Path] = None
        if install_dir.exists():
            backup = install_dir.with_name(f".{install_dir.name}.backup-{uuid.uuid4().hex[:8]}")
            os.replace(install_dir, backup)

        try:
            os.replace(staging_dir, install_dir)
        except OSError:
            if backup is not None:
                os.replace(backup, install_dir)
            raise

        if backup is not None:
            shutil.rmtree(backup)
