"""Adaptadores de infraestructura: HTTP (httpx) y render del perfil (Jinja2)."""
