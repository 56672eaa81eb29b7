import sys
from datetime import date
from pathlib import Path

import pytest
from loguru import logger

from conversion.modules.translation_registry import TranslationRegistry

RESOURCES = Path(__file__).parent / "resources"


@pytest.fixture(autouse=True)
def reset_logger():
    """CLI-Tests biegen loguru auf ihre eigenen Streams um, danach wieder auf stderr."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="DEBUG")


@pytest.fixture
def resources_dir() -> Path:
    return RESOURCES


@pytest.fixture
def fixed_today() -> date:
    return date(2058, 6, 15)


@pytest.fixture
def registry(fixed_today) -> TranslationRegistry:
    return TranslationRegistry.with_defaults(today=lambda: fixed_today)


@pytest.fixture
def patient_mapping_data() -> dict:
    return {
        "root": {"structure": "array", "collectionType": "patient"},
        "objects": {
            "patient": {
                "fields": [
                    {"sourceName": "id", "targetName": "patientId", "targetType": "java.lang.Integer"},
                    {"sourceName": "gender", "targetName": "sex", "translationMethod": "charToGenderWord"},
                    {"sourceName": "state", "targetName": "state", "translationMethod": "fullStateToAbbreviation"},
                    {"sourceName": "birthDate", "targetName": "age", "translationMethod": "dateToAge"},
                ]
            }
        },
    }
