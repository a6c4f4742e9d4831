"""
API HTTP principal para bpmn-lint-service.

Esta aplicación FastAPI expone endpoints REST que usan el core interno
(bpmn_lint_core.engine) para lintear diagramas BPMN 2.0.

Uso:
    uvicorn api.main:app --reload --port 8000
"""

import logging
import os
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bpmn_lint_core.config import get_settings

from .dependencies import build_lint_service
from .routes import lint

# Cargar variables de entorno
load_dotenv()

# Determinar ambiente
ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Configurar logging según ambiente
log_level = getattr(logging, LOG_LEVEL, logging.INFO)
logging.basicConfig(
    level=log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)
logger.info(f"🚀 Iniciando API en ambiente: {ENVIRONMENT}")


# Construir parser + linter al arrancar: una config inválida falla acá
_settings = get_settings()
_service = build_lint_service(_settings)
logger.info(f"🧩 Lint listo (scope={_service.scope}, auth={'on' if _settings.action_api_key else 'off'})")


app = FastAPI(
    title="BPMN Lint Service",
    description="API para lintear diagramas BPMN 2.0 con reglas estilo bpmnlint",
    version="0.1.0",
)

# CORS: configurar según ambiente
cors_origins = _settings.cors_origin_list

logger.info(f"🌐 CORS origins configurados: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials="*" not in cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Body o parámetros inválidos son un error del cliente: 400."""
    logger.warning(f"Request inválido en {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


# Registrar rutas
app.include_router(lint.router)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "bpmn-lint-service"}


@app.get("/health")
async def health():
    """Health check detallado."""
    return {
        "status": "ok",
        "service": "bpmn-lint-service",
        "version": "0.1.0",
    }
