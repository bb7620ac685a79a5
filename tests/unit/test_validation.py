# tests/unit/test_validation.py
"""针对 `label_hub.validation` 中标签完整性校验的单元测试。"""

import pytest

from label_hub.store import InMemoryLabelStore
from label_hub.validation import LabelValidator, ValidationReport
from tests.helpers.factories import TEA_ROOM_SCOPE, make_record
from tests.helpers.schemas import TeaRoomLabels


@pytest.fixture
def validator(memory_store: InMemoryLabelStore) -> LabelValidator:
    return LabelValidator(memory_store)


@pytest.mark.asyncio
async def test_complete_scope_is_valid(validator: LabelValidator) -> None:
    report = await validator.validate_scope(
        TEA_ROOM_SCOPE,
        "zh",
        required_keys=["pageTitle", "greeting", "menu.title", "menu.price.label"],
    )
    assert report.is_valid
    assert report.warnings == []


@pytest.mark.asyncio
async def test_missing_required_key_is_an_error(validator: LabelValidator) -> None:
    report = await validator.validate_scope(
        TEA_ROOM_SCOPE, "ja", required_keys=["pageTitle", "greeting"]
    )
    assert not report.is_valid
    assert len(report.errors) == 1
    assert "greeting" in report.errors[0]


@pytest.mark.asyncio
async def test_missing_optional_and_unused_keys_are_warnings(
    validator: LabelValidator,
) -> None:
    report = await validator.validate_scope(
        TEA_ROOM_SCOPE,
        "en",
        required_keys=["pageTitle", "menu.title", "menu.price.label"],
        optional_keys=["footer"],
    )
    assert report.is_valid
    assert any("footer" in w for w in report.warnings)
    assert any("greeting" in w for w in report.warnings)


@pytest.mark.asyncio
async def test_format_and_empty_text_warnings() -> None:
    store = InMemoryLabelStore(
        [make_record("bad-key", "Text"), make_record("blank", "   ")]
    )
    report = await LabelValidator(store).validate_scope(
        TEA_ROOM_SCOPE, "en", required_keys=[]
    )
    assert report.is_valid
    assert len(report.warnings) == 2


@pytest.mark.asyncio
async def test_validate_schema_uses_declared_leaves(validator: LabelValidator) -> None:
    report = await validator.validate_schema(TEA_ROOM_SCOPE, "ja", TeaRoomLabels)

    assert not report.is_valid
    assert "menu.title" in report.errors[0]
    assert "menu.price.label" in report.errors[0]
    assert any("greeting" in w for w in report.warnings)


@pytest.mark.asyncio
async def test_compare_languages_reports_gaps(validator: LabelValidator) -> None:
    report = await validator.compare_languages(TEA_ROOM_SCOPE, "en", "ja")

    assert report.is_valid
    assert len(report.warnings) == 1
    for key in ("greeting", "menu.title", "menu.price.label"):
        assert key in report.warnings[0]


@pytest.mark.asyncio
async def test_compare_languages_complete_translation(
    validator: LabelValidator,
) -> None:
    report = await validator.compare_languages(TEA_ROOM_SCOPE, "en", "zh")
    assert report.warnings == []


@pytest.mark.asyncio
async def test_compare_languages_with_absent_target(
    validator: LabelValidator,
) -> None:
    report = await validator.compare_languages(TEA_ROOM_SCOPE, "en", "fr")
    assert len(report.warnings) == 1
    assert "fr" in report.warnings[0]


@pytest.mark.asyncio
async def test_validate_all_against_reference(validator: LabelValidator) -> None:
    """日文在菜单与 Extra 作用域下完全没有记录，也要逐个报告。"""
    report = await validator.validate_all(reference_lang="en")

    assert report.is_valid
    assert report.warnings == [
        "作用域 teaRoomView 的 ja 翻译缺少: greeting",
        "作用域 teaRoomView.menu 的 ja 翻译缺少: price.label, title",
        "作用域 teaRoomViewExtra 的 ja 翻译缺少: pageTitle",
    ]


@pytest.mark.asyncio
async def test_validate_all_without_reference(validator: LabelValidator) -> None:
    report = await validator.validate_all()
    assert report.is_valid
    assert report.warnings == []


def test_report_merge() -> None:
    merged = ValidationReport(errors=["e1"]).merge(ValidationReport(warnings=["w1"]))
    assert merged.errors == ["e1"]
    assert merged.warnings == ["w1"]
    assert not merged.is_valid


@pytest.mark.asyncio
async def test_check_scope_reports_format_problems_in_every_language() -> None:
    store = InMemoryLabelStore(
        [
            make_record("bad-key", "Text"),
            make_record("blank", " ", language_code="zh"),
            make_record("pageTitle", "Other", scope_key="otherView"),
        ]
    )
    validator = LabelValidator(store)

    report = await validator.check_scope(TEA_ROOM_SCOPE)
    assert len(report.warnings) == 2

    zh_only = await validator.check_scope(TEA_ROOM_SCOPE, "zh")
    assert len(zh_only.warnings) == 1


def test_report_to_markdown() -> None:
    report = ValidationReport(errors=["缺少 pageTitle"], warnings=["空翻译"])
    markdown = report.to_markdown()

    assert markdown.startswith("# 标签校验报告")
    assert "❌ 校验失败" in markdown
    assert "## 错误\n\n- 缺少 pageTitle" in markdown
    assert "## 警告\n\n- 空翻译" in markdown


def test_valid_report_to_markdown_has_no_sections() -> None:
    markdown = ValidationReport().to_markdown()
    assert "✅ 校验通过" in markdown
    assert "## 错误" not in markdown
    assert "## 警告" not in markdown
