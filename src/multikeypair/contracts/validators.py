"""
JSON Schema Contract Validators

Валидация JSON-документов keypair / recursivekey согласно формальным
JSON Schema контрактам (библиотека jsonschema, draft 2020-12).

Схемы:
- keypair.json
- recursivekey.json
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в каталоге schema/ рядом с этим модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'keypair')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)


class KeypairValidator(ContractValidator):
    """Валидатор для keypair контракта."""

    def __init__(self):
        super().__init__("keypair")


class RecursivekeyValidator(ContractValidator):
    """Валидатор для recursivekey контракта."""

    def __init__(self):
        super().__init__("recursivekey")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_keypair_document(data: Dict[str, Any]) -> None:
    """
    Валидация keypair документа.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    KeypairValidator().validate(data)


def validate_recursivekey_document(data: Dict[str, Any]) -> None:
    """
    Валидация recursivekey документа.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    RecursivekeyValidator().validate(data)
