"""Service layer: command/query handlers returning ServiceResult.

Services may import from the domain layer and receive a repository.
They must never import from commands, output, or infrastructure.
"""
