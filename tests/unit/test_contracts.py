"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация документов, построенных моделями
- Детекция нарушений required полей и constraints
- Восстановление моделей из документов
"""

import pytest
from jsonschema import ValidationError

from src.multikeypair.contracts import (
    KeypairValidator,
    RecursivekeyValidator,
    SchemaLoader,
    validate_keypair_document,
    validate_recursivekey_document,
)
from src.multikeypair.domain import BIP32, ED25519, Keypair, Recursivekey
from src.multikeypair.errors import UnknownCodeError


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def keypair() -> Keypair:
    return Keypair(code=ED25519, private=b"\x00private", public=b"public")


@pytest.fixture
def recursivekey(keypair) -> Recursivekey:
    return Recursivekey(
        code=BIP32,
        master=b"master-seed",
        children=[keypair, Keypair(code=BIP32, private=b"c", public=b"")],
    )


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Тесты для SchemaLoader"""

    @pytest.mark.parametrize("schema_name", ["keypair", "recursivekey"])
    def test_schemas_load(self, schema_name: str) -> None:
        schema = SchemaLoader().load_schema(schema_name)
        assert schema["title"] == schema_name

    def test_schema_cached(self) -> None:
        loader = SchemaLoader()
        assert loader.load_schema("keypair") is loader.load_schema("keypair")

    def test_missing_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_directory(self, tmp_path) -> None:
        with pytest.raises(RuntimeError):
            SchemaLoader(tmp_path / "absent")


# =============================================================================
# KEYPAIR DOCUMENT
# =============================================================================


class TestKeypairDocument:
    """Тесты для keypair контракта"""

    def test_model_document_valid(self, keypair) -> None:
        document = keypair.to_document()
        validate_keypair_document(document)
        KeypairValidator().validate(document)
        assert document["private_length"] == 8

    def test_document_roundtrip(self, keypair) -> None:
        assert Keypair.from_document(keypair.to_document()) == keypair

    def test_missing_required_field(self, keypair) -> None:
        document = keypair.to_document()
        del document["public"]
        with pytest.raises(ValidationError):
            validate_keypair_document(document)

    def test_non_base58_key_rejected(self, keypair) -> None:
        document = {**keypair.to_document(), "private": "0OIl"}
        with pytest.raises(ValidationError, match="does not match"):
            KeypairValidator().validate(document)

    def test_extra_field_rejected(self, keypair) -> None:
        document = {**keypair.to_document(), "seed": "x"}
        with pytest.raises(ValidationError, match="Additional properties"):
            KeypairValidator().validate(document)

    def test_name_mismatch(self, keypair) -> None:
        document = {**keypair.to_document(), "name": "rsa"}
        with pytest.raises(ValueError, match="does not match"):
            Keypair.from_document(document)

    def test_length_mismatch(self, keypair) -> None:
        document = {**keypair.to_document(), "public_length": 1}
        with pytest.raises(ValueError, match="public_length"):
            Keypair.from_document(document)

    def test_unknown_code(self, keypair) -> None:
        document = {**keypair.to_document(), "code": 0x99}
        with pytest.raises(UnknownCodeError):
            Keypair.from_document(document)


# =============================================================================
# RECURSIVEKEY DOCUMENT
# =============================================================================


class TestRecursivekeyDocument:
    """Тесты для recursivekey контракта"""

    def test_model_document_valid(self, recursivekey) -> None:
        document = recursivekey.to_document()
        validate_recursivekey_document(document)
        RecursivekeyValidator().validate(document)
        assert document["children_num"] == 2

    def test_document_roundtrip(self, recursivekey) -> None:
        assert Recursivekey.from_document(recursivekey.to_document()) == recursivekey

    def test_children_num_mismatch(self, recursivekey) -> None:
        document = {**recursivekey.to_document(), "children_num": 3}
        with pytest.raises(ValueError, match="children_num"):
            Recursivekey.from_document(document)

    def test_invalid_child(self, recursivekey) -> None:
        document = recursivekey.to_document()
        del document["children"][0]["code"]
        with pytest.raises(ValidationError):
            validate_recursivekey_document(document)
