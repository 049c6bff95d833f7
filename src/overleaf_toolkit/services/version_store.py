"""Installed and seed version records of a toolkit checkout."""

import os
import re
import shutil
import tempfile

from overleaf_toolkit.constants import (
    OLD_VERSION_FILE,
    SEED_VERSION_FILE,
    VERSION_FILE,
    VERSION_PATTERN,
)
from overleaf_toolkit.errors import ConfigurationError
from overleaf_toolkit.errors_catalog import actionable_error


def validate_version(value: str, source: str = "version file") -> str:
    if not re.fullmatch(VERSION_PATTERN, value):
        raise ConfigurationError(actionable_error("invalid_version", version=value, path=source))
    return value


def is_newer(candidate: str, current: str) -> bool:
    """Compare two versions as plain strings.

    Only reliable while every component is written with the same number of
    digits ("4.10.0" sorts before "4.9.0").
    """
    return candidate > current


def major(version: str) -> str:
    return version.split(".", 1)[0]


class VersionStore:
    """Reads both version records and swaps the installed one."""

    def __init__(self, root: str, logger):
        self.root = root
        self.logger = logger
        self.installed_file = os.path.join(root, VERSION_FILE)
        self.backup_file = os.path.join(root, OLD_VERSION_FILE)
        self.seed_file = os.path.join(root, SEED_VERSION_FILE)

    def read_installed(self) -> str:
        return self._read(self.installed_file)

    def read_seed(self) -> str:
        return self._read(self.seed_file)

    def swap(self, seed_version: str):
        """Back up the installed version, then overwrite it with `seed_version`."""
        validate_version(seed_version, self.seed_file)

        self.logger.info("Backing up %s to %s", self.installed_file, self.backup_file)
        try:
            shutil.copyfile(self.installed_file, self.backup_file)
        except OSError as exc:
            raise ConfigurationError(f"Could not back up version file '{self.installed_file}': {exc}") from exc

        self.logger.info("Writing version %s to %s", seed_version, self.installed_file)
        directory = os.path.dirname(self.installed_file) or "."
        fd, temp_path = tempfile.mkstemp(prefix=".version-", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as file_obj:
                file_obj.write(f"{seed_version}\n")
            self._copy_metadata(self.installed_file, temp_path)
            os.replace(temp_path, self.installed_file)
        except OSError as exc:
            raise ConfigurationError(f"Could not write version file '{self.installed_file}': {exc}") from exc
        finally:
            if os.path.exists(temp_path):
                try:
                    os.remove(temp_path)
                except OSError:
                    pass

    def _copy_metadata(self, source: str, destination: str):
        """Give the replacement file the mode and owner of the file it replaces."""
        shutil.copymode(source, destination)
        stat_result = os.stat(source)
        if hasattr(os, "chown") and stat_result.st_uid != os.stat(destination).st_uid:
            try:
                os.chown(destination, stat_result.st_uid, stat_result.st_gid)
            except PermissionError:
                self.logger.warning("Could not keep the owner of %s", source)

    def _read(self, path: str) -> str:
        if not os.path.isfile(path):
            raise ConfigurationError(actionable_error("version_not_found", path=path))

        try:
            with open(path, "r", encoding="utf-8") as file_obj:
                first_line = file_obj.readline()
        except OSError as exc:
            raise ConfigurationError(f"Could not read version file '{path}': {exc}") from exc

        return validate_version(first_line.strip(), path)
