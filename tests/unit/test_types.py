# tests/unit/test_types.py
"""针对 `label_hub.core.types` 中核心数据类型的单元测试。"""

import pytest
from pydantic import ValidationError

from label_hub.core.types import (
    LabelRecord,
    ResolvedRecords,
    ScopeFilter,
    ViewResult,
    split_key_path,
)
from tests.helpers.factories import make_record


def test_record_derives_key_paths_at_construction() -> None:
    """记录在构造时即计算好作用域与标签的结构化路径。"""
    record = make_record("price.label", "Price", scope_key="teaRoomView.menu")
    assert record.scope_path == ("teaRoomView", "menu")
    assert record.label_path == ("price", "label")
    assert record.identity == ("teaRoomView.menu", "price.label", "en")


def test_record_accepts_camel_case_fields() -> None:
    record = LabelRecord.model_validate(
        {
            "scopeKey": "teaRoomView",
            "labelKey": "pageTitle",
            "languageCode": "zh",
            "translatedText": "茶室",
        }
    )
    assert record.scope_key == "teaRoomView"
    assert record.label_path == ("pageTitle",)


def test_explicit_label_path_keeps_literal_dots() -> None:
    """显式给出的标签路径会保留含字面点号的标签键。"""
    record = LabelRecord(
        scope_key="aboutView",
        label_key="version1.0",
        language_code="en",
        translated_text="Version 1.0",
        label_path=("version1.0",),
    )
    assert record.label_path == ("version1.0",)


@pytest.mark.parametrize(
    "overrides",
    [
        {"scope_key": ""},
        {"scope_key": "teaRoomView..menu"},
        {"label_key": ""},
        {"label_key": "."},
        {"language_code": ""},
    ],
)
def test_record_rejects_malformed_keys(overrides: dict) -> None:
    data = {
        "scope_key": "teaRoomView",
        "label_key": "pageTitle",
        "language_code": "en",
        "translated_text": "Tea Room",
        **overrides,
    }
    with pytest.raises(ValidationError):
        LabelRecord(**data)


def test_record_is_immutable() -> None:
    record = make_record("pageTitle", "Tea Room")
    with pytest.raises(ValidationError):
        record.translated_text = "changed"  # type: ignore[misc]


def test_split_key_path_drops_empty_segments() -> None:
    assert split_key_path("a.b.c") == ("a", "b", "c")
    assert split_key_path("a..b.") == ("a", "b")
    assert split_key_path("") == ()


@pytest.mark.parametrize(
    "scope_key, expected",
    [
        ("teaRoomView", True),
        ("teaRoomView.menu", True),
        ("teaRoomView.menu.drinks", True),
        ("teaRoomViewExtra", False),
        ("teaRoom", False),
        ("TeaRoomView", False),
    ],
)
def test_scope_filter_matches_only_exact_or_dotted_children(
    scope_key: str, expected: bool
) -> None:
    """前缀相似的作用域（如 teaRoomViewExtra）绝不能匹配。"""
    assert ScopeFilter("teaRoomView").matches(scope_key) is expected


@pytest.mark.parametrize("bad_scope", ["", ".", "teaRoomView.", "a..b"])
def test_scope_filter_rejects_malformed_base_scope(bad_scope: str) -> None:
    with pytest.raises(ValueError):
        ScopeFilter(bad_scope)


def test_scope_filter_segments() -> None:
    scope = ScopeFilter("teaRoomView.menu")
    assert scope.segments == ("teaRoomView", "menu")
    assert scope.child_prefix == "teaRoomView.menu."


def test_resolved_records_fallback_flags() -> None:
    records = (make_record("pageTitle", "Tea Room"),)
    hit = ResolvedRecords("teaRoomView", "zh", records, used_language="zh")
    fallback = ResolvedRecords("teaRoomView", "fr", records, used_language="en")
    miss = ResolvedRecords("teaRoomView", "fr")

    assert hit.found and not hit.is_fallback
    assert fallback.found and fallback.is_fallback
    assert not miss.found and not miss.is_fallback
    assert miss.used_language is None


def test_view_result_fallback_flag() -> None:
    assert ViewResult(labels={}, data=None, requested_language="fr", used_language="en").is_fallback
    assert not ViewResult(labels={}, data=None, requested_language="en", used_language="en").is_fallback
    assert not ViewResult(labels=None, data=None, requested_language="fr").is_fallback
