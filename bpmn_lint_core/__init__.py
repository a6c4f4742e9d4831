"""
Core del servicio de lint BPMN.

Contiene la lógica reutilizable, sin HTTP:
- Parser de BPMN 2.0 XML (bpmn/)
- Catálogo de reglas y motor (rules/, linter)
- Normalizador de resultados (normalizer, classification)
- Orquestador (engine)
"""
