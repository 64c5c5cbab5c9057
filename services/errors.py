class BudgetRequestError(Exception):
	pass


class InvalidPayload(BudgetRequestError):
	def __init__(self, details: str) -> None:
		super().__init__(details)
		self.details = details


class MissingQuantity(BudgetRequestError):
	def __init__(self) -> None:
		super().__init__("Quantidade de peças é obrigatória")


class StorageError(BudgetRequestError):
	pass


class NotFound(StorageError):
	pass
