"""Capa CLI (Typer + Rich): prompts, salida y códigos de error."""
