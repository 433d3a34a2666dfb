"""Shared sample catalogs for the test suite."""

import pytest

from multilan_helper.models import CatalogStore, Language, MultilanMetadata, MultilanStatus


@pytest.fixture
def sample_api_data():
    """Flat catalog export (current-api shape)."""
    return [
        {
            "id": 10001,
            "status": "FINAL",
            "createdAt": "2025-01-01T10:00:00Z",
            "modifiedAt": "2025-02-01T10:00:00Z",
            "modifiedBy": "jdoe",
            "multilanTextList": [
                {"id": 1, "languageId": "en", "wording": "Submit", "sourceLanguageId": "en"},
                {"id": 2, "languageId": "fr", "wording": "Soumettre", "sourceLanguageId": "en"},
                {"id": 3, "languageId": "nl", "wording": "Indienen", "sourceLanguageId": "en"},
                {"id": 4, "languageId": "de", "wording": "Einreichen", "sourceLanguageId": "en"},
            ],
        },
        {
            "id": 10002,
            "multilanTextList": [
                {"id": 5, "languageId": "en", "wording": "Cancel"},
                {"id": 6, "languageId": "fr", "wording": "Annuler"},
                {"id": 7, "languageId": "nl", "wording": "Annuleren"},
                {"id": 8, "languageId": "de", "wording": "Abbrechen"},
            ],
        },
    ]


@pytest.fixture
def sample_search_response():
    """One page of the paginated search response."""
    return {
        "resultList": [
            {
                "multilan": {
                    "id": 20001,
                    "createdAt": "2025-03-01T08:00:00Z",
                    "multilanTextList": [
                        {"id": 11, "languageId": 3, "wording": "Save", "status": "DRAFT",
                         "sourceLanguageId": 3, "modifiedAt": "2025-03-02T08:00:00Z", "modifiedBy": "alice"},
                        {"id": 12, "languageId": 2, "wording": "Enregistrer", "status": "FINAL",
                         "sourceLanguageId": 2, "modifiedAt": "2025-03-03T08:00:00Z", "modifiedBy": "bob"},
                        {"id": 13, "languageId": 1, "wording": "Opslaan", "status": "FINAL"},
                        {"id": 14, "languageId": 4, "wording": "Speichern", "status": "FINAL"},
                    ],
                },
                "mostRelevantTextId": 12,
            },
            {
                "multilan": {
                    "id": 20002,
                    "modifiedAt": "2025-04-01T08:00:00Z",
                    "modifiedBy": "carol",
                    "multilanTextList": [
                        {"id": 21, "languageId": 3, "wording": "Delete", "status": "IN_TRANSLATION",
                         "sourceLanguageId": 3},
                        {"id": 22, "languageId": 2, "wording": ""},
                        {"id": 23, "languageId": 99, "wording": "Unknown language"},
                    ],
                },
            },
        ],
        "isLastPage": False,
        "numberOfElements": 2,
        "totalElements": 3,
        "totalPages": 2,
    }


@pytest.fixture
def sample_tra_data():
    """Contents of the four per-language .tra files."""
    return {
        "en": '10001,"Submit","All"\n10002,"Say ""Hello""","All"\n',
        "fr": '10001,"Soumettre","All"\r\n10002,"Dites ""Bonjour""","All"\r\n',
        "nl": '10001,"Indienen","All"\n\n10003,Alleen,All\n',
        "de": '10001,"Einreichen","All"\n',
    }


@pytest.fixture
def translations():
    """Plain translation map used by the engine tests."""
    return {
        "10001": {"en": "Submit", "fr": "Soumettre", "nl": "Indienen", "de": "Einreichen"},
        "10002": {"en": "Cancel", "fr": "Annuler", "nl": "Annuleren", "de": "Abbrechen"},
        "10003": {
            "en": "Hello ###name###",
            "fr": "Bonjour ###name###",
            "nl": "Hallo ###name###",
            "de": "Hallo ###name###",
        },
        "10004": {"en": "Welcome back", "fr": "Bon retour", "nl": "Welkom terug", "de": "Willkommen zurück"},
    }


@pytest.fixture
def store(translations):
    """CatalogStore built from the plain map, with sparse metadata."""
    metadata = {
        "10001": MultilanMetadata(status=MultilanStatus.FINAL, source_language=Language.EN),
    }
    typed = {
        mid: {Language(code): wording for code, wording in entry.items()}
        for mid, entry in translations.items()
    }
    return CatalogStore.build(typed, metadata, source="test")
