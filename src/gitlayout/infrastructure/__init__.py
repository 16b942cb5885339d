"""Infrastructure layer: filesystem checks, config store, repository handle.

This layer depends on stdlib, the domain layer, and third-party libs (dulwich).
It must never import from services, commands, or output.
The service layer wraps these operations in ServiceResult.
"""
