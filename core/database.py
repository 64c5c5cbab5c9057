from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from core.settings import Settings
from models.orcamento import Base


def create_db_engine(settings: Settings) -> Engine:
	dsn = settings.database_dsn()
	if settings.uses_sqlite:
		# SQLite em memória precisa de uma única conexão compartilhada entre threads
		if dsn in ("sqlite://", "sqlite:///:memory:"):
			return create_engine(dsn, connect_args={"check_same_thread": False}, poolclass=StaticPool)
		return create_engine(dsn, connect_args={"check_same_thread": False})

	return create_engine(
		dsn,
		pool_size=settings.db_max_idle_conns,
		max_overflow=max(settings.db_max_open_conns - settings.db_max_idle_conns, 0),
		pool_recycle=settings.db_conn_max_lifetime,
		pool_pre_ping=True,
	)


def ping(engine: Engine) -> None:
	with engine.connect() as conn:
		conn.execute(text("SELECT 1"))


def migrate(engine: Engine) -> None:
	Base.metadata.create_all(engine)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
	return sessionmaker(bind=engine, expire_on_commit=False)
