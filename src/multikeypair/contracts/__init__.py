"""
Contract Validation Module

JSON Schema контракты для документов keypair и recursivekey.
"""

from .validators import (
    ContractValidator,
    KeypairValidator,
    RecursivekeyValidator,
    SchemaLoader,
    validate_keypair_document,
    validate_recursivekey_document,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "KeypairValidator",
    "RecursivekeyValidator",
    # Functions
    "validate_keypair_document",
    "validate_recursivekey_document",
]
