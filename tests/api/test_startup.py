"""Tests for schema preparation at API startup."""

from pathlib import Path
from unittest.mock import patch

import pytest

from billwise.api import main as main_module
from billwise.api.main import prepare_database
from billwise.config import Settings, StorageSettings
from billwise.core.exceptions import ConfigurationError
from billwise.infrastructure.storage.sqlite.migrations.migrator import (
    get_migration_status,
    initialize_database,
)


def _settings(tmp_path: Path, auto_migrate: bool) -> Settings:
    return Settings(storage=StorageSettings(data_dir=tmp_path, auto_migrate=auto_migrate))


class TestPrepareDatabase:
    async def test_auto_migrate(self, tmp_path: Path):
        settings = _settings(tmp_path, auto_migrate=True)
        with patch.object(main_module, "get_settings", return_value=settings):
            await prepare_database()

        status = await get_migration_status(settings.storage.db_path)
        assert status.up_to_date

    async def test_refuses_pending_without_auto_migrate(self, tmp_path: Path):
        settings = _settings(tmp_path, auto_migrate=False)
        with patch.object(main_module, "get_settings", return_value=settings):
            with pytest.raises(ConfigurationError) as exc_info:
                await prepare_database()

        assert exc_info.value.details["exists"] is False
        assert not settings.storage.db_path.exists()

    async def test_up_to_date_without_auto_migrate(self, tmp_path: Path):
        settings = _settings(tmp_path, auto_migrate=False)
        await initialize_database(settings.storage.db_path, create_backup_before=False)
        with patch.object(main_module, "get_settings", return_value=settings):
            await prepare_database()
