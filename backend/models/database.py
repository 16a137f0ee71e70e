"""
Shared Flask-SQLAlchemy handle.

The handle is unbound until create_app() calls db.init_app(app); the
engine it owns is verified at startup and disposed at shutdown.
"""
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
