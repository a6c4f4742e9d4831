"""
API HTTP para bpmn-lint-service.

Esta capa expone endpoints REST que usan el core interno (bpmn_lint_core.engine)
para lintear diagramas BPMN.

La API está diseñada para ser consumida por:
- Acciones de asistentes (GPT Actions) con API key
- Editores de diagramas y pipelines de CI
- Scripts de automatización
"""
