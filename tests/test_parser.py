from __future__ import annotations

import pytest
from pydantic import ValidationError

from adplatforms.exceptions import MalformedLineError
from adplatforms.ingestion.parser import parse_line, try_parse_line
from adplatforms.models.records import PlatformRecord, RejectedLine, RejectReason


def test_parse_single_location() -> None:
    record = parse_line("Yandex.Direct:/ru")

    assert record.platform == "Yandex.Direct"
    assert record.locations == ("/ru",)


def test_parse_trims_platform_and_every_location() -> None:
    record = parse_line("  Revda Gazette : /ru/svrd/revda ,  /ru/svrd/pervik  ")

    assert record.platform == "Revda Gazette"
    assert record.locations == ("/ru/svrd/revda", "/ru/svrd/pervik")


def test_parse_splits_on_first_colon_only() -> None:
    record = parse_line("A:b:/ru")

    assert record.platform == "A"
    assert record.locations == ("b:/ru",)


def test_parse_keeps_unicode_names() -> None:
    record = parse_line("Газета уральских москвичей:/ru/msk,/ru/permobl")

    assert record.platform == "Газета уральских москвичей"
    assert record.locations == ("/ru/msk", "/ru/permobl")


@pytest.mark.parametrize(
    ("line", "reason"),
    [
        ("BadLineNoColon", RejectReason.MISSING_SEPARATOR),
        ("   :/ru", RejectReason.EMPTY_PLATFORM),
        (":/ru", RejectReason.EMPTY_PLATFORM),
        ("A:", RejectReason.EMPTY_LOCATION),
        ("A:   ", RejectReason.EMPTY_LOCATION),
        ("A:/ru,,/us", RejectReason.EMPTY_LOCATION),
        ("A:/ru, ", RejectReason.EMPTY_LOCATION),
    ],
)
def test_parse_rejects_malformed_lines(line: str, reason: RejectReason) -> None:
    with pytest.raises(MalformedLineError) as exc_info:
        parse_line(line)

    assert exc_info.value.reason == reason
    assert exc_info.value.line == line


def test_try_parse_returns_rejected_line_verbatim() -> None:
    result = try_parse_line("  BadLine  ", 7)

    assert isinstance(result, RejectedLine)
    assert result.line == "  BadLine  "
    assert result.line_number == 7
    assert result.reason == RejectReason.MISSING_SEPARATOR


def test_try_parse_returns_record_for_valid_line() -> None:
    result = try_parse_line("A:/ru,/us", 1)

    assert isinstance(result, PlatformRecord)
    assert result.locations == ("/ru", "/us")


def test_record_model_rejects_blank_values() -> None:
    with pytest.raises(ValidationError):
        PlatformRecord(platform="  ", locations=("/ru",))
    with pytest.raises(ValidationError):
        PlatformRecord(platform="A", locations=())
    with pytest.raises(ValidationError):
        PlatformRecord(platform="A", locations=("/ru", " "))
