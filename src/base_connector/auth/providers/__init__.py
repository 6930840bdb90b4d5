"""Authentication providers package.

Each provider is automatically registered when imported.
"""

from .basic import BasicAuthentication
from .token import BearerAuthentication, HeaderAuthentication

__all__ = [
    "BasicAuthentication",
    "BearerAuthentication",
    "HeaderAuthentication",
]
