from typing import Optional
from urllib.parse import quote_plus

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

	env: str = "development"
	port: int = 8080
	app_name: str = "turning-back"

	database_url: str = ""
	db_host: str = "localhost"
	db_port: int = 5432
	db_user: str = "turning_back_user"
	db_password: str = "turning_back_pass"
	db_name: str = "turning_back_db"
	db_ssl_mode: str = "disable"

	# Pool: conexões ociosas, máximo de abertas e tempo de vida (segundos)
	db_max_idle_conns: int = Field(default=10, ge=1)
	db_max_open_conns: int = Field(default=100, ge=1)
	db_conn_max_lifetime: int = Field(default=3600, ge=1)

	log_level: str = "info"
	log_format: str = "json"

	@property
	def is_production(self) -> bool:
		return self.env.upper() == "PRODUCTION"

	@property
	def uses_sqlite(self) -> bool:
		dsn = self.database_dsn()
		return dsn.startswith("sqlite")

	def database_dsn(self) -> str:
		if self.database_url:
			return self.database_url
		if self.db_host == "sqlite" or self.db_name == ":memory:":
			if self.db_name == ":memory:":
				return "sqlite://"
			return f"sqlite:///{self.db_name}"
		return (
			f"postgresql+psycopg://{quote_plus(self.db_user)}:{quote_plus(self.db_password)}"
			f"@{self.db_host}:{self.db_port}/{self.db_name}"
			f"?sslmode={self.db_ssl_mode}&options=-c%20timezone%3DUTC"
		)


def load_settings(**overrides: Optional[object]) -> Settings:
	# Variáveis de ambiente (e .env) com sobrescritas explícitas
	return Settings(**{k: v for k, v in overrides.items() if v is not None})
