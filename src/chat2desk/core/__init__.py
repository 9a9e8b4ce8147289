"""Núcleo: configuración, errores, dominio y contratos."""
