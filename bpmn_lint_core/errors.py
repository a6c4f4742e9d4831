"""
bpmn_lint_core.errors
=====================

Excepciones del core.

Taxonomía
---------
- `BpmnInputError`: problemas con el documento recibido (vacío, XML inválido,
  raíz incorrecta, encoding roto, demasiado grande). La capa HTTP los traduce
  a 4xx y nunca se reintentan.
- `LintConfigError`: configuración inválida del motor de reglas o de la tabla
  de severidades. Se lanza al arrancar, no por request.

Los huecos de clasificación (categoría desconocida, finding sin id) NO son
errores: el normalizador los resuelve con defaults.
"""


class BpmnLintError(Exception):
    """Base de todas las excepciones del servicio."""


class BpmnInputError(BpmnLintError):
    """El documento recibido no se puede lintear."""

    status_code = 400


class EmptyDocumentError(BpmnInputError):
    pass


class InputDecodingError(BpmnInputError):
    pass


class DocumentTooLargeError(BpmnInputError):
    status_code = 413


class BpmnParseError(BpmnInputError):
    pass


class InvalidRootElementError(BpmnInputError):
    pass


class LintConfigError(BpmnLintError):
    """Configuración de reglas o severidades inválida."""
