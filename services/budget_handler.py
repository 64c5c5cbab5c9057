import logging
from typing import Any, Dict

from fastapi.responses import JSONResponse

from services.budget_repository import BudgetRequestRepository
from services.errors import InvalidPayload, MissingQuantity, StorageError
from services.normalizer import normalize

HELP_REQUIRED_FIELDS = "Campos obrigatórios: nome, telefone, quantidade_pecas (ou quantidadePecas). Email é opcional."
HELP_QUANTITY = "Use 'quantidade_pecas' ou 'quantidadePecas' com valor maior que 0"


def _json(status_code: int, content: Dict[str, Any]) -> JSONResponse:
	return JSONResponse(status_code=status_code, content=content)


class BudgetRequestHandler:
	def __init__(self, repository: BudgetRequestRepository, logger: logging.Logger) -> None:
		self._repository = repository
		self._logger = logger

	def create(self, raw_payload: bytes) -> JSONResponse:
		received = raw_payload.decode("utf-8", errors="replace")
		self._logger.info("JSON bruto recebido", extra={"raw_json": received, "size": len(raw_payload)})

		try:
			entity = normalize(raw_payload)
		except InvalidPayload as exc:
			self._logger.error("Erro no bind JSON", extra={"error": exc.details, "json": received})
			return _json(400, {
				"error": "Invalid request data",
				"details": exc.details,
				"received_json": received,
				"help": HELP_REQUIRED_FIELDS,
			})
		except MissingQuantity as exc:
			self._logger.error("Quantidade de peças não informada")
			return _json(400, {"error": str(exc), "help": HELP_QUANTITY})

		if entity.email:
			self._logger.info("Email fornecido", extra={"email": entity.email})
		else:
			self._logger.info("Email não fornecido - campo opcional")

		try:
			created = self._repository.create(entity)
		except StorageError as exc:
			self._logger.error("Erro ao criar orçamento no banco", extra={"error": str(exc)})
			return _json(500, {"error": "Failed to create orcamento", "details": str(exc)})

		self._logger.info("Orçamento criado com sucesso", extra={"id": created.id})
		return _json(201, {"message": "Orçamento criado com sucesso", "orcamento": created.to_json()})

	def get(self, raw_id: str) -> JSONResponse:
		# Inteiro sem sinal de 32 bits
		if not raw_id.isascii() or not raw_id.isdigit() or int(raw_id) > 0xFFFFFFFF:
			return _json(400, {"error": "Invalid ID format"})

		try:
			found = self._repository.get_by_id(int(raw_id))
		except StorageError as exc:
			# Ausência e falha de consulta são tratadas igualmente
			self._logger.info("Orçamento não encontrado", extra={"id": raw_id, "error": str(exc)})
			return _json(404, {"error": "Orçamento não encontrado"})
		return _json(200, found.to_json())

	def list(self) -> JSONResponse:
		try:
			found = self._repository.get_all()
		except StorageError as exc:
			self._logger.error("Erro ao listar orçamentos", extra={"error": str(exc)})
			return _json(500, {"error": "Failed to fetch orcamentos", "details": str(exc)})
		return _json(200, {"orcamentos": [o.to_json() for o in found], "total": len(found)})
