from typing import Any, Optional

from pydantic import ValidationError

from models.budget import BudgetRequest, CreateBudgetRequestPayload
from services.errors import InvalidPayload, MissingQuantity


def parse_payload(raw_payload: bytes) -> CreateBudgetRequestPayload:
	try:
		return CreateBudgetRequestPayload.model_validate_json(raw_payload)
	except ValidationError as exc:
		raise InvalidPayload(str(exc)) from exc


def resolve_quantity(payload: CreateBudgetRequestPayload) -> int:
	# Ordem fixa: quantidade_pecas, depois o alias quantidadePecas
	for candidate in (payload.quantidade_pecas, payload.quantidadePecas):
		if candidate is not None and candidate > 0:
			return candidate
	raise MissingQuantity()


def resolve_attachment(anexo: Any) -> Optional[str]:
	if isinstance(anexo, str):
		return anexo
	return None


def normalize(raw_payload: bytes) -> BudgetRequest:
	payload = parse_payload(raw_payload)
	quantity = resolve_quantity(payload)
	return BudgetRequest(
		name=payload.nome,
		phone=payload.telefone,
		email=payload.email or "",
		description=payload.descricao or "",
		quantity=quantity,
		attachment_ref=resolve_attachment(payload.anexo) or "",
	)
