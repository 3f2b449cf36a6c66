"""Interfaces/abstracciones del Core.

- Define contratos (Protocol) que implementan adaptadores concretos.
- El coordinador depende de estas abstracciones, no de httpx.
"""
