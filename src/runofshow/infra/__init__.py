"""
Infrastructure layer - database, logging, settings, and technical concerns.

This layer contains infrastructure concerns like database access,
repositories, logging, configuration, and per-production locking.
"""
