"""
Domain layer - entities and store interfaces.

This layer contains the production, segment, catalogue, and crew binding
entities plus the storage protocols the usecases depend on.
"""
