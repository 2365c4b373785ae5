from datetime import datetime, timezone
from typing import Optional

from app.models.admission import StudentRecord

# Record attribute -> spreadsheet column header, in sheet column order.
SHEET_COLUMNS = {
    "student_name": "Student Name",
    "father_name": "Father Name",
    "student_id": "Student ID",
    "phone_number": "Phone Number",
    "address": "Address",
    "admission_fee": "Admission Fee",
    "class_name": "Class",
    "admission_date": "Admission Date",
}
TIMESTAMP_COLUMN = "Timestamp"


def iso_timestamp(now: Optional[datetime] = None) -> str:
    moment = now or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_sheet_row(record: StudentRecord, now: Optional[datetime] = None) -> dict[str, str]:
    row = {column: getattr(record, attr) for attr, column in SHEET_COLUMNS.items()}
    row[TIMESTAMP_COLUMN] = iso_timestamp(now)
    return row
