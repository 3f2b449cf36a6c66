"""Modelos y entidades del dominio.

- Estructuras de datos puras (Pydantic v2 y dataclasses inmutables).
- El dominio no conoce HTTP ni CLI: solo registros, consultas y catálogo.
"""
