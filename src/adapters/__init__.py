"""Adaptadores de I/O (HTTP, codificación, almacenes)."""
