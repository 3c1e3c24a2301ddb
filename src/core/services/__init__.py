"""Servicios del Core: pipeline de red y fachada de persistencia."""
