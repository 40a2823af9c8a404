"""Service layer — the timeline engine and the operations built on it.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
