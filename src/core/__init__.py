"""Core: configuración, dominio y flujo de registro (sin I/O de terminal)."""
