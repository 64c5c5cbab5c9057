from core.settings import Settings


def test_database_url_takes_precedence():
	settings = Settings(database_url="sqlite:///tmp.db", db_host="db.interno")
	assert settings.database_dsn() == "sqlite:///tmp.db"
	assert settings.uses_sqlite


def test_sqlite_host():
	settings = Settings(database_url="", db_host="sqlite", db_name="orcamentos.db")
	assert settings.database_dsn() == "sqlite:///orcamentos.db"


def test_sqlite_memory():
	assert Settings(database_url="", db_name=":memory:").database_dsn() == "sqlite://"


def test_postgres_dsn_from_parts():
	settings = Settings(
		database_url="", db_host="db", db_port=5433, db_user="user", db_password="p@ss", db_name="orc", db_ssl_mode="require",
	)
	dsn = settings.database_dsn()
	assert dsn.startswith("postgresql+psycopg://user:p%40ss@db:5433/orc?sslmode=require")
	assert not settings.uses_sqlite


def test_environment_variables(monkeypatch):
	monkeypatch.setenv("ENV", "PRODUCTION")
	monkeypatch.setenv("PORT", "9090")
	monkeypatch.setenv("LOG_LEVEL", "debug")
	settings = Settings()
	assert settings.is_production
	assert settings.port == 9090
	assert settings.log_level == "debug"
