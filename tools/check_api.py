#!/usr/bin/env python3
"""
Chequeo rápido de la instalación del servicio de lint.

Verifica que estén las dependencias de runtime, que la configuración de
reglas/severidades del entorno sea válida y que la app FastAPI se pueda
importar. Lintea además un proceso mínimo para confirmar el pipeline completo.

Ejecutar: python tools/check_api.py
"""

import importlib
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# (módulo a importar, nombre del paquete en el índice)
RUNTIME_DEPENDENCIES = [
    ("fastapi", "fastapi"),
    ("pydantic", "pydantic"),
    ("uvicorn", "uvicorn"),
    ("dotenv", "python-dotenv"),
    ("multipart", "python-multipart"),
]

SMOKE_BPMN = """<?xml version="1.0" encoding="UTF-8"?>
<bpmn:definitions xmlns:bpmn="http://www.omg.org/spec/BPMN/20100524/MODEL" id="Definitions_check">
  <bpmn:process id="Process_check">
    <bpmn:task id="Task_check" />
  </bpmn:process>
</bpmn:definitions>
"""


def check_dependencies() -> bool:
    print("📦 Dependencias:")
    ok = True
    for module_name, package in RUNTIME_DEPENDENCIES:
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            print(f"   ❌ {package}: {e}  →  pip install {package}")
            ok = False
            continue
        version = getattr(module, "__version__", "?")
        print(f"   ✅ {package} {version}")
    return ok


def check_core() -> bool:
    print("\n🧩 Configuración del lint:")
    try:
        from bpmn_lint_core.config import get_settings
        from bpmn_lint_core.engine import LintService

        settings = get_settings()
        service = LintService.from_settings(settings)
        description = service.rule_engine.describe()
        enabled = [name for name, value in description["rules"].items() if value != "off"]
        print(f"   ✅ Conjunto '{description['extends']}': {len(enabled)}/{len(description['rules'])} reglas")
        print(f"   ✅ Scope {service.scope}, blocking {sorted(service.table.blocking)}")

        outcome = service.lint(SMOKE_BPMN)["outcome"]
        print(f"   ✅ Lint de prueba: status={outcome.status}, {len(outcome.issues)} issues")
    except Exception as e:
        print(f"   ❌ {type(e).__name__}: {e}")
        return False
    return True


def check_app() -> bool:
    print("\n🌐 App FastAPI:")
    try:
        from api.main import app
    except Exception as e:
        print(f"   ❌ No se pudo importar api.main: {e}")
        return False
    paths = sorted(route.path for route in app.routes if route.path.startswith("/lint-bpmn"))
    print(f"   ✅ {app.title} {app.version}: {', '.join(paths)}")
    return True


if __name__ == "__main__":
    results = [check_dependencies(), check_core(), check_app()]
    if not all(results):
        sys.exit(1)
    print("\n✅ Todo en orden. Levantar con: python run_api.py")
