"""Interfaces/abstracciones del Core.

Por qué:
- Define el contrato (Protocol) del cliente de registro que implementa el
  adaptador httpx.
- Permite invertir dependencias: el flujo depende de la abstracción.
"""
