"""Service layer — the public Hyper-V operations.

Services may import from domain, infrastructure, and config.
They must never import from commands or output.
"""
