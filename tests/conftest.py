import json
from typing import Any, Dict, Iterator, List

import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.database import create_db_engine, create_session_factory, migrate
from core.logging import get_logger
from core.settings import Settings
from models.budget import BudgetRequest
from services.budget_repository import BudgetRequestRepository, SqlAlchemyBudgetRequestRepository
from services.errors import StorageError


@pytest.fixture
def settings() -> Settings:
	return Settings(database_url="sqlite://", log_level="error", log_format="console")


@pytest.fixture
def repository(settings: Settings) -> Iterator[SqlAlchemyBudgetRequestRepository]:
	engine = create_db_engine(settings)
	migrate(engine)
	yield SqlAlchemyBudgetRequestRepository(create_session_factory(engine), get_logger("tests"))
	engine.dispose()


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
	with TestClient(create_app(settings)) as test_client:
		yield test_client


class FailingRepository(BudgetRequestRepository):
	def create(self, entity: BudgetRequest) -> BudgetRequest:
		raise StorageError("database is locked")

	def get_by_id(self, budget_id: int) -> BudgetRequest:
		raise StorageError("connection refused")

	def get_all(self) -> List[BudgetRequest]:
		raise StorageError("connection refused")

	def update(self, entity: BudgetRequest) -> None:
		raise StorageError("connection refused")

	def delete(self, budget_id: int) -> None:
		raise StorageError("connection refused")


@pytest.fixture
def failing_client(settings: Settings) -> Iterator[TestClient]:
	with TestClient(create_app(settings, repository=FailingRepository())) as test_client:
		yield test_client


@pytest.fixture
def make_payload():
	def _make(**fields: Any) -> bytes:
		body: Dict[str, Any] = {"nome": "Ana", "telefone": "111"}
		body.update(fields)
		return json.dumps(body).encode("utf-8")
	return _make
