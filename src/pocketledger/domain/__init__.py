"""Domain layer for pocketledger application.

Services are imported from their own modules (pocketledger.domain.debt, ...)
so that the database layer can depend on pocketledger.domain.entities without
an import cycle.
"""
