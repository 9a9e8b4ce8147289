"""Adaptadores: transporte HTTP, login, paginación y recursos de la API."""
