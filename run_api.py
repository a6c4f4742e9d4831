#!/usr/bin/env python3
"""
Levanta el servicio de lint con uvicorn.

Variables de entorno:
    HOST (default 0.0.0.0), PORT (default 8000), RELOAD ("true" en desarrollo)

Ejecutar desde la raíz del proyecto para que se encuentre el paquete `api`.
"""

import os

import uvicorn
from dotenv import load_dotenv

if __name__ == "__main__":
    load_dotenv()
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    reload = os.getenv("RELOAD", "false").strip().lower() == "true"

    print(f"🚀 BPMN Lint Service en http://{host}:{port} (docs en /docs)")
    uvicorn.run("api.main:app", host=host, port=port, reload=reload)
