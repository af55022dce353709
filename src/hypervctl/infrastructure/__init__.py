"""Infrastructure layer — PowerShell process, output decoding, path checks.

This layer depends on stdlib, pydantic, and the domain layer.
It must never import from services, commands, or output.
"""
