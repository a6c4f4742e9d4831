"""
bpmn_lint_core.lint_config
==========================

Configuración del motor de reglas: qué conjunto de reglas se usa y qué
overrides por regla se aplican.

Fuentes (en orden, la última gana):
1) Conjunto base: `extends` del archivo `.bpmnlintrc` (si `BPMNLINT_CONFIG`
   apunta a uno) o `BPMNLINT_EXTENDS`.
2) `rules` del archivo.
3) `BPMNLINT_RULES="regla=valor,..."` del entorno.

Valores aceptados por regla (compatibles con bpmnlint):
- "off" | "warn" | "error" | "info"
- 0 (off), 1 (warn), 2 (error)
- [valor, opciones]: se usa solo el valor; las opciones se ignoran

Todo error acá es `LintConfigError` y se lanza al arrancar.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping

from .classification import parse_pairs
from .config import Settings
from .errors import LintConfigError
from .rules.registry import RuleRegistry

logger = logging.getLogger(__name__)

RULE_VALUES = {"off", "warn", "error", "info"}
_NUMERIC_VALUES = {0: "off", 1: "warn", 2: "error"}


def normalize_rule_value(rule_name: str, value: Any) -> str:
    if isinstance(value, (list, tuple)):
        if not value:
            raise LintConfigError(f"Valor vacío para la regla '{rule_name}'")
        value = value[0]
    if isinstance(value, bool):
        raise LintConfigError(f"Valor inválido para la regla '{rule_name}': {value!r}")
    if isinstance(value, int):
        if value not in _NUMERIC_VALUES:
            raise LintConfigError(f"Valor inválido para la regla '{rule_name}': {value!r}")
        return _NUMERIC_VALUES[value]
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized.isdigit():
            return normalize_rule_value(rule_name, int(normalized))
        if normalized in RULE_VALUES:
            return normalized
    raise LintConfigError(
        f"Valor inválido para la regla '{rule_name}': {value!r}. Usar off|warn|error|info"
    )


def normalize_rule_set_name(extends: Any) -> str:
    """`bpmnlint:recommended` → `recommended`. Solo se soporta un conjunto."""
    if isinstance(extends, (list, tuple)):
        if len(extends) != 1:
            raise LintConfigError("Solo se soporta un conjunto de reglas en 'extends'")
        extends = extends[0]
    if not isinstance(extends, str) or not extends.strip():
        raise LintConfigError(f"'extends' inválido: {extends!r}")
    name = extends.strip()
    if name.startswith("bpmnlint:"):
        name = name[len("bpmnlint:"):]
    if name.startswith("plugin:"):
        raise LintConfigError(f"Los plugins de bpmnlint no están soportados: '{extends}'")
    return name


@dataclass(frozen=True)
class LintConfig:
    extends: str = "recommended"
    rules: Mapping[str, str] = field(default_factory=dict)

    def resolve(self, registry: RuleRegistry) -> Dict[str, str]:
        """
        Categoría efectiva por regla. Las reglas en "off" quedan fuera.

        Raises:
            LintConfigError: conjunto o regla desconocidos.
        """
        try:
            effective = registry.rule_set(self.extends)
        except KeyError:
            raise LintConfigError(
                f"Conjunto de reglas desconocido: '{self.extends}'. Usar recommended|all"
            ) from None

        for rule_name, value in self.rules.items():
            if rule_name not in registry:
                raise LintConfigError(f"Regla desconocida: '{rule_name}'")
            effective[rule_name] = normalize_rule_value(rule_name, value)

        return {name: value for name, value in effective.items() if value != "off"}

    def with_overrides(self, overrides: Mapping[str, Any]) -> "LintConfig":
        merged = dict(self.rules)
        merged.update(overrides)
        return LintConfig(extends=self.extends, rules=merged)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LintConfig":
        if not isinstance(data, Mapping):
            raise LintConfigError("La configuración de lint debe ser un objeto JSON")
        rules = data.get("rules") or {}
        if not isinstance(rules, Mapping):
            raise LintConfigError("'rules' debe ser un objeto JSON")
        return cls(
            extends=normalize_rule_set_name(data.get("extends", "recommended")),
            rules=dict(rules),
        )

    @classmethod
    def from_file(cls, path: Path) -> "LintConfig":
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise LintConfigError(f"No existe el archivo de configuración de lint: {path}") from e
        except json.JSONDecodeError as e:
            raise LintConfigError(f"Configuración de lint inválida en {path}: {e}") from e
        return cls.from_mapping(data)

    @classmethod
    def from_settings(cls, settings: Settings) -> "LintConfig":
        if settings.lint_config_path:
            config = cls.from_file(Path(settings.lint_config_path))
            logger.info(f"Configuración de lint cargada desde {settings.lint_config_path}")
        else:
            config = cls(extends=normalize_rule_set_name(settings.lint_extends))
        if settings.lint_rules:
            config = config.with_overrides(parse_pairs(settings.lint_rules))
        return config
