import sys
from datetime import datetime, timezone
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

import pytest

from app.integrations.sheets.errors import (
    ERROR_MESSAGES,
    SheetError,
    SheetErrorKind,
    classify_response,
    error_message,
)
from app.integrations.sheets.payload import build_sheet_row, iso_timestamp
from app.models.admission import StudentRecord, SubmissionResult, UnknownFieldError

EXPECTED_COLUMNS = [
    "Student Name",
    "Father Name",
    "Student ID",
    "Phone Number",
    "Address",
    "Admission Fee",
    "Class",
    "Admission Date",
    "Timestamp",
]


FORM_VALUES = {
    "studentName": "Bilal Ahmed",
    "fatherName": "Tariq Ahmed",
    "studentId": "S-77",
    "phoneNumber": "0300-7654321",
    "address": "House 4, Street 9, Karachi",
    "admissionFee": "12000",
    "class": "Grade 3",
    "admissionDate": "2026-08-15",
}


def _record() -> StudentRecord:
    record = StudentRecord.empty()
    for name, value in FORM_VALUES.items():
        record = record.with_field(name, value)
    return record


def test_row_has_exactly_the_sheet_columns():
    row = build_sheet_row(_record())
    assert list(row.keys()) == EXPECTED_COLUMNS


def test_row_values_are_copied_verbatim():
    record = _record().with_field("address", "  Flat 2,\nBlock C  ")
    row = build_sheet_row(record, now=datetime(2026, 10, 19, 8, 30, 5, 123456, tzinfo=timezone.utc))

    assert row["Student Name"] == "Bilal Ahmed"
    assert row["Father Name"] == "Tariq Ahmed"
    assert row["Student ID"] == "S-77"
    assert row["Phone Number"] == "0300-7654321"
    assert row["Address"] == "  Flat 2,\nBlock C  "
    assert row["Admission Fee"] == "12000"
    assert row["Class"] == "Grade 3"
    assert row["Admission Date"] == "2026-08-15"
    assert row["Timestamp"] == "2026-10-19T08:30:05.123Z"


def test_timestamp_is_generated_per_call():
    stamp = iso_timestamp()
    parsed = datetime.fromisoformat(stamp.replace("Z", "+00:00"))
    assert parsed.tzinfo is not None
    assert abs((datetime.now(timezone.utc) - parsed).total_seconds()) < 60


def test_with_field_accepts_both_spellings_and_keeps_siblings():
    record = _record()
    updated = record.with_field("class_name", "Grade 4")

    assert updated.class_name == "Grade 4"
    assert record.class_name == "Grade 3"
    for attr in type(record).model_fields:
        if attr != "class_name":
            assert getattr(updated, attr) == getattr(record, attr)


def test_with_field_rejects_unknown_names():
    with pytest.raises(UnknownFieldError):
        StudentRecord.empty().with_field("motherName", "x")


def test_missing_fields_lists_blank_entries_in_form_order():
    record = StudentRecord.empty().with_field("studentName", "Sara").with_field("address", "   ")
    assert record.missing_fields() == [
        "fatherName",
        "studentId",
        "phoneNumber",
        "address",
        "admissionFee",
        "class",
        "admissionDate",
    ]
    assert _record().missing_fields() == []


@pytest.mark.parametrize(
    "status,body,expected",
    [
        (200, None, None),
        (201, {"ok": True}, None),
        (403, {"detail": "Connection to the origin sheet denied"}, SheetError(SheetErrorKind.PERMISSION_DENIED, 403)),
        (403, "Connection to the origin sheet denied", SheetError(SheetErrorKind.HTTP_ERROR, 403)),
        (403, {"detail": ["Connection to the origin sheet denied"]}, SheetError(SheetErrorKind.HTTP_ERROR, 403)),
        (401, {"detail": "Connection to the origin sheet denied"}, SheetError(SheetErrorKind.INVALID_CREDENTIAL, 401)),
        (404, None, SheetError(SheetErrorKind.RESOURCE_NOT_FOUND, 404)),
        (429, "slow down", SheetError(SheetErrorKind.HTTP_ERROR, 429)),
        (302, None, SheetError(SheetErrorKind.HTTP_ERROR, 302)),
    ],
)
def test_classify_response(status, body, expected):
    assert classify_response(status, body) == expected


def test_every_kind_has_a_distinct_message():
    assert set(ERROR_MESSAGES) == set(SheetErrorKind)
    messages = [error_message(SheetError(kind, 502)) for kind in SheetErrorKind]
    assert len(set(messages)) == len(messages)
    assert all(messages)
    assert "502" in error_message(SheetError(SheetErrorKind.HTTP_ERROR, 502))


def test_successful_result_cannot_carry_an_error():
    with pytest.raises(ValueError):
        SubmissionResult(success=True, message="done", error=SheetErrorKind.HTTP_ERROR)
    with pytest.raises(ValueError):
        SubmissionResult(success=False, message="")
