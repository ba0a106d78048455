"""Domain layer — entity types and pure money rules.

Pure Python with pydantic models. No I/O, no database access.
Must never import from infrastructure, services, commands, or output.
"""
