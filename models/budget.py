from datetime import datetime
from typing import Any, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator
from pydantic.alias_generators import to_camel

# Limites de um inteiro de 64 bits (coluna BIGINT)
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class CreateBudgetRequestPayload(BaseModel):
	# Corpo aceito em POST /orcament; sem coerção de tipos (strings não viram números)
	model_config = ConfigDict(strict=True, extra="ignore")

	nome: StrictStr = Field(min_length=1)
	email: Optional[StrictStr] = None
	telefone: StrictStr = Field(min_length=1)
	quantidade_pecas: Optional[StrictInt] = Field(default=None, ge=INT64_MIN, le=INT64_MAX)
	# Alias usado por alguns clientes
	quantidadePecas: Optional[StrictInt] = Field(default=None, ge=INT64_MIN, le=INT64_MAX)
	descricao: Optional[StrictStr] = None
	# Qualquer JSON; só strings são aproveitadas na normalização
	anexo: Any = None
	fileUploadEnabled: Optional[bool] = None

	@field_validator("email", mode="before")
	@classmethod
	def _empty_email_is_absent(cls, value: Any) -> Any:
		if value == "":
			return None
		return value

	@field_validator("email")
	@classmethod
	def _plain_email_address(cls, value: Optional[str]) -> Optional[str]:
		if value is None:
			return None
		# Só o endereço; formatos "Nome <endereco>" não são aceitos
		if "<" in value or ">" in value:
			raise ValueError("value is not a valid email address: display names are not allowed")
		try:
			validate_email(value, check_deliverability=False)
		except EmailNotValidError as exc:
			raise ValueError(f"value is not a valid email address: {exc}") from exc
		# Guarda o valor como enviado, sem normalizar
		return value


class BudgetRequest(BaseModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

	id: Optional[int] = None
	created_at: Optional[datetime] = None
	updated_at: Optional[datetime] = None
	deleted_at: Optional[datetime] = Field(default=None, exclude=True)

	quantity: int = Field(ge=1, le=INT64_MAX, description="Quantidade de peças")
	description: str = ""
	name: str = Field(min_length=1)
	attachment_ref: str = ""
	email: str = ""
	phone: str = Field(min_length=1)

	def to_json(self) -> dict:
		return self.model_dump(mode="json", by_alias=True)
