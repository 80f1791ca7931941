"""
Tests d'intégration pour country-sync.

Ces tests utilisent un vrai PostgreSQL sur un port exotique (5433)
pour éviter les conflits avec la base de développement. Ils sont
ignorés si la base de test est injoignable.

Usage:
    pytest -m integration
"""
