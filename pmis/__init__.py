"""
PMIS Core Package
=================

Prison Management Information System core.

This package contains:
    - api/: FastAPI REST API layer
    - scoring/: Behavior score and rating summary engines
    - validation/: Government identity discrepancy engine
    - services/: Persistence-backed service layer
    - db/: SQLAlchemy models and session management

Author: PMIS Team
Version: 1.0.0
"""

__version__ = "1.0.0"
