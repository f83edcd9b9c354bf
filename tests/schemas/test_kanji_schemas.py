"""Kanji schemas — create defaults, patch semantics, and unknown-field rejection."""

import pytest
from pydantic import ValidationError

from kanji_api.schemas.kanji import (
    DeleteAllResponse, KanjiCreate, KanjiPatch, KanjiSample,
)


def test_create_defaults_text_fields():
    body = KanjiCreate(character="水")
    assert (body.onyomi, body.kunyomi, body.meaning) == ("", "", "")


@pytest.mark.parametrize("character", ["", "   "])
def test_create_rejects_blank_character(character):
    with pytest.raises(ValidationError):
        KanjiCreate(character=character)


def test_create_rejects_unknown_field():
    with pytest.raises(ValidationError):
        KanjiCreate(character="水", Kanji="水")


def test_patch_changes_only_include_sent_fields():
    patch = KanjiPatch.model_validate({"meaning": "liquid water"})
    assert patch.changes() == {"meaning": "liquid water"}


def test_empty_patch_has_no_changes():
    assert KanjiPatch.model_validate({}).changes() == {}


def test_patch_rejects_explicit_null():
    with pytest.raises(ValidationError, match="onyomi"):
        KanjiPatch.model_validate({"onyomi": None})


def test_patch_allows_empty_reading():
    assert KanjiPatch.model_validate({"kunyomi": ""}).changes() == {"kunyomi": ""}


def test_sample_serializes_camel_case_flag():
    dumped = KanjiSample(kanji=[], is_default_set=True).model_dump(by_alias=True)
    assert dumped == {"kanji": [], "isDefaultSet": True}


def test_delete_all_serializes_camel_case_count():
    dumped = DeleteAllResponse(deleted_count=4).model_dump(by_alias=True)
    assert dumped == {"deletedCount": 4}
