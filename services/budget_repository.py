import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from models.budget import BudgetRequest
from models.orcamento import OrcamentoRecord
from services.errors import NotFound, StorageError


class BudgetRequestRepository(ABC):
	@abstractmethod
	def create(self, entity: BudgetRequest) -> BudgetRequest:
		"""Persiste e devolve a entidade com id e timestamps preenchidos."""

	@abstractmethod
	def get_by_id(self, budget_id: int) -> BudgetRequest:
		"""Levanta NotFound se não houver registro vivo com esse id."""

	@abstractmethod
	def get_all(self) -> List[BudgetRequest]:
		...

	@abstractmethod
	def update(self, entity: BudgetRequest) -> None:
		...

	@abstractmethod
	def delete(self, budget_id: int) -> None:
		...


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
	# SQLite devolve datetimes sem fuso; os valores são gravados em UTC
	if value is not None and value.tzinfo is None:
		return value.replace(tzinfo=timezone.utc)
	return value


def _to_entity(record: OrcamentoRecord) -> BudgetRequest:
	return BudgetRequest(
		id=record.id,
		created_at=_as_utc(record.created_at),
		updated_at=_as_utc(record.updated_at),
		deleted_at=_as_utc(record.deleted_at),
		quantity=record.quantidade_pecas,
		description=record.descricao,
		name=record.nome,
		attachment_ref=record.anexo,
		email=record.email,
		phone=record.telefone,
	)


def _copy_fields(entity: BudgetRequest, record: OrcamentoRecord) -> None:
	record.quantidade_pecas = entity.quantity
	record.descricao = entity.description
	record.nome = entity.name
	record.anexo = entity.attachment_ref
	record.email = entity.email
	record.telefone = entity.phone


class SqlAlchemyBudgetRequestRepository(BudgetRequestRepository):
	def __init__(self, session_factory: sessionmaker[Session], logger: logging.Logger) -> None:
		self._session_factory = session_factory
		self._logger = logger

	def _live(self, session: Session, budget_id: int) -> OrcamentoRecord:
		stmt = select(OrcamentoRecord).where(
			OrcamentoRecord.id == budget_id,
			OrcamentoRecord.deleted_at.is_(None),
		)
		record = session.scalars(stmt).first()
		if record is None:
			raise NotFound(f"orcamento {budget_id} not found")
		return record

	def create(self, entity: BudgetRequest) -> BudgetRequest:
		record = OrcamentoRecord()
		_copy_fields(entity, record)
		try:
			with self._session_factory() as session, session.begin():
				session.add(record)
				session.flush()
				session.refresh(record)
				created = _to_entity(record)
		except SQLAlchemyError as exc:
			self._logger.error("Falha ao inserir orçamento", extra={"error": str(exc)})
			raise StorageError(str(exc)) from exc
		self._logger.debug("Orçamento inserido", extra={"id": created.id})
		return created

	def get_by_id(self, budget_id: int) -> BudgetRequest:
		try:
			with self._session_factory() as session:
				return _to_entity(self._live(session, budget_id))
		except SQLAlchemyError as exc:
			raise StorageError(str(exc)) from exc

	def get_all(self) -> List[BudgetRequest]:
		stmt = select(OrcamentoRecord).where(OrcamentoRecord.deleted_at.is_(None)).order_by(OrcamentoRecord.id)
		try:
			with self._session_factory() as session:
				return [_to_entity(r) for r in session.scalars(stmt)]
		except SQLAlchemyError as exc:
			raise StorageError(str(exc)) from exc

	def update(self, entity: BudgetRequest) -> None:
		if entity.id is None:
			raise NotFound("orcamento without id")
		try:
			with self._session_factory() as session, session.begin():
				record = self._live(session, entity.id)
				_copy_fields(entity, record)
		except SQLAlchemyError as exc:
			raise StorageError(str(exc)) from exc

	def delete(self, budget_id: int) -> None:
		try:
			with self._session_factory() as session, session.begin():
				record = self._live(session, budget_id)
				record.deleted_at = datetime.now(timezone.utc)
		except SQLAlchemyError as exc:
			raise StorageError(str(exc)) from exc
