"""Tests for Settings path and URL helpers."""

from pathlib import Path

from formspace.settings import Settings, settings


class TestSettingsPaths:
    """Log directory resolution."""

    def test_logs_root_relative_to_project(self):
        logs = settings.get_logs_root()
        assert logs.name == "logs"
        assert logs.parent == Settings.get_project_root()

    def test_logs_root_absolute_override(self, tmp_path: Path):
        custom = Settings(logs_subdir=str(tmp_path / "var-log"))
        assert custom.get_logs_root() == tmp_path / "var-log"


class TestDatabaseUrl:
    """Database URL generation."""

    def test_test_environment_uses_memory_sqlite(self):
        assert Settings(environment="test", database_type="sqlite").get_database_url_auto() == "sqlite:///:memory:"

    def test_explicit_url_wins(self):
        custom = Settings(database_url="sqlite:///custom.db", database_type="mysql")
        assert custom.get_database_url_auto() == "sqlite:///custom.db"

    def test_mysql_url(self):
        custom = Settings(
            database_type="mysql",
            mysql_user="u",
            mysql_password="p",
            mysql_host="db",
            mysql_port=3307,
            mysql_database="forms",
        )
        assert custom.get_database_url_auto() == "mysql+pymysql://u:p@db:3307/forms?charset=utf8mb4"


class TestCorsOrigins:
    def test_origins_follow_frontend_port(self):
        custom = Settings(frontend_host="app.local", frontend_port=3000)
        assert custom.cors_origins == [
            "http://app.local:3000",
            "http://127.0.0.1:3000",
            "http://localhost:3000",
        ]
