from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.requests import ClientDisconnect
import uvicorn

from core.database import create_db_engine, create_session_factory, migrate, ping
from core.logging import configure_logging, get_logger
from core.settings import Settings, load_settings
from services.budget_handler import BudgetRequestHandler
from services.budget_repository import BudgetRequestRepository, SqlAlchemyBudgetRequestRepository

SERVICE_NAME = "turning-back-api"
SERVICE_VERSION = "1.0.0"


def create_app(settings: Optional[Settings] = None, repository: Optional[BudgetRequestRepository] = None) -> FastAPI:
	settings = settings or load_settings()

	@asynccontextmanager
	async def lifespan(app: FastAPI) -> AsyncIterator[None]:
		configure_logging(settings.log_level, settings.log_format)
		logger = get_logger("app")

		engine = None
		repo = repository
		if repo is None:
			# Falhas aqui (banco inacessível) derrubam o processo na subida
			engine = create_db_engine(settings)
			try:
				ping(engine)
				migrate(engine)
			except Exception:
				logger.critical("Failed to initialize database", exc_info=True)
				engine.dispose()
				raise
			repo = SqlAlchemyBudgetRequestRepository(create_session_factory(engine), get_logger("repository"))

		app.state.handler = BudgetRequestHandler(repo, get_logger("orcamento"))
		logger.info("Starting server", extra={"port": settings.port, "environment": settings.env})
		try:
			yield
		finally:
			if engine is not None:
				engine.dispose()

	docs = {} if not settings.is_production else {"docs_url": None, "redoc_url": None, "openapi_url": None}
	app = FastAPI(title=settings.app_name, version=SERVICE_VERSION, lifespan=lifespan, **docs)

	app.add_middleware(
		CORSMiddleware,
		allow_origins=["*"],
		allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
		allow_headers=[
			"Origin", "Content-Type", "Content-Length", "Accept-Encoding", "X-CSRF-Token", "Authorization",
		],
	)

	request_logger = get_logger("http")

	@app.middleware("http")
	async def log_request(request: Request, call_next):
		request_logger.info("Request recebido", extra={
			"method": request.method,
			"path": request.url.path,
			"query": request.url.query,
			"user_agent": request.headers.get("user-agent", ""),
			"content_type": request.headers.get("content-type", ""),
		})
		return await call_next(request)

	@app.get("/health")
	def health() -> JSONResponse:
		return JSONResponse(content={"status": "ok", "service": SERVICE_NAME, "version": SERVICE_VERSION})

	@app.get("/api/v1/ping")
	def ping_route() -> JSONResponse:
		return JSONResponse(content={"message": "pong"})

	@app.post("/orcament")
	async def create_orcamento(request: Request) -> JSONResponse:
		try:
			body = await request.body()
		except ClientDisconnect as exc:
			return JSONResponse(status_code=400, content={
				"error": "Erro ao ler dados da requisição",
				"details": str(exc),
			})
		return await run_in_threadpool(request.app.state.handler.create, body)

	@app.get("/orcament/{orcamento_id}")
	def get_orcamento(orcamento_id: str, request: Request) -> JSONResponse:
		return request.app.state.handler.get(orcamento_id)

	@app.get("/orcament")
	def list_orcamentos(request: Request) -> JSONResponse:
		return request.app.state.handler.list()

	return app


app = create_app()


def main() -> None:
	settings = load_settings()
	uvicorn.run("app:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
	main()
