"""
Contract enforcement package.

Provides pydantic response models and the @api_contract decorator.
"""

from .wrapper import api_contract, serialize

__all__ = [
    'api_contract',
    'serialize',
]
