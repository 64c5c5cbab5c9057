import pytest

from models.budget import BudgetRequest
from services.errors import NotFound


def _entity(**fields) -> BudgetRequest:
	data = {"name": "Ana", "phone": "111", "quantity": 2}
	data.update(fields)
	return BudgetRequest(**data)


def test_create_assigns_id_and_timestamps(repository):
	created = repository.create(_entity(email="ana@empresa.com.br", attachment_ref="ref-1"))
	assert created.id is not None
	assert created.created_at is not None
	assert created.created_at.tzinfo is not None
	assert created.updated_at is not None
	assert created.deleted_at is None
	assert created.email == "ana@empresa.com.br"
	assert created.attachment_ref == "ref-1"


def test_get_by_id_round_trip(repository):
	created = repository.create(_entity(description="Peças"))
	found = repository.get_by_id(created.id)
	assert found.id == created.id
	assert found.description == "Peças"
	assert found.quantity == 2


def test_get_by_id_unknown(repository):
	with pytest.raises(NotFound):
		repository.get_by_id(999)


def test_get_all_empty(repository):
	assert repository.get_all() == []


def test_get_all_orders_by_id(repository):
	first = repository.create(_entity(name="Ana"))
	second = repository.create(_entity(name="Bia"))
	assert [o.id for o in repository.get_all()] == [first.id, second.id]


def test_update_changes_fields(repository):
	created = repository.create(_entity())
	repository.update(created.model_copy(update={"quantity": 10, "phone": "222"}))
	found = repository.get_by_id(created.id)
	assert found.quantity == 10
	assert found.phone == "222"
	assert found.updated_at > created.updated_at
	assert found.created_at == created.created_at


def test_update_unknown(repository):
	with pytest.raises(NotFound):
		repository.update(_entity(id=42))


def test_delete_hides_record(repository):
	kept = repository.create(_entity(name="Ana"))
	removed = repository.create(_entity(name="Bia"))
	repository.delete(removed.id)

	with pytest.raises(NotFound):
		repository.get_by_id(removed.id)
	assert [o.id for o in repository.get_all()] == [kept.id]

	with pytest.raises(NotFound):
		repository.delete(removed.id)
