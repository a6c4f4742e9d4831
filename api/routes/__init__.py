"""Rutas de la API."""

from . import lint

__all__ = ["lint"]
