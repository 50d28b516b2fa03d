"""
Transport — текстовая форма frame для text-only каналов.
"""

from src.multikeypair.transport.text_form import (
    keypair_from_text,
    multikeypair_from_text,
    multirecursivekey_from_text,
    recursivekey_from_text,
    to_text,
)

__all__ = [
    "to_text",
    "multikeypair_from_text",
    "keypair_from_text",
    "multirecursivekey_from_text",
    "recursivekey_from_text",
]
