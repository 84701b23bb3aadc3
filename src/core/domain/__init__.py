"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2):
  fuentes, artefactos, resultados y el entorno de ejecución.
- El dominio no conoce HTTP, CLI, ni el sistema de archivos.
"""
