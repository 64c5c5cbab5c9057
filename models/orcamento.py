from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import BigInteger, DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
	return datetime.now(timezone.utc)


class Base(DeclarativeBase):
	pass


class OrcamentoRecord(Base):
	__tablename__ = "orcamentos"

	id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
	created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
	updated_at: Mapped[datetime] = mapped_column(
		DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
	)
	# Tombstone: linhas com deleted_at preenchido não aparecem nas leituras
	deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True, index=True)

	quantidade_pecas: Mapped[int] = mapped_column(BigInteger, nullable=False)
	descricao: Mapped[str] = mapped_column(Text, nullable=False, default="")
	nome: Mapped[str] = mapped_column(String(255), nullable=False)
	anexo: Mapped[str] = mapped_column(Text, nullable=False, default="")
	email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
	telefone: Mapped[str] = mapped_column(String(64), nullable=False)
