"""Orquestación del flujo de registro."""
