"""Modelos y entidades del dominio.

Estructuras de datos puras (Pydantic v2): el dominio no conoce HTTP.
"""
