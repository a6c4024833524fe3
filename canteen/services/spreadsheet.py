"""
Weekly menu workbook -> (day, meal type, description, price) rows.

Expected layout, first sheet, one header row:

    Day | Breakfast | Price | Lunch | Price | Dinner | Price

Rows with an empty Day cell are skipped. A meal whose description or price
cell is blank contributes nothing for that slot. Field-level checks happen
later in publication.validate_rows.
"""
import csv
import io
import os
import zipfile
from typing import Any, List, Sequence, Tuple

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from canteen.core.errors import ValidationError
from canteen.models.menu.menu_item import MealType

RawRow = Tuple[Any, Any, Any, Any]

# (description column, price column) per meal, after the Day column
MEAL_COLUMNS = (
    (MealType.BREAKFAST, 1, 2),
    (MealType.LUNCH, 3, 4),
    (MealType.DINNER, 5, 6),
)

ALLOWED_EXTS = {".xlsx", ".csv"}


def _cell(row: Sequence[Any], idx: int) -> Any:
    if idx >= len(row):
        return None
    value = row[idx]
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def rows_from_grid(grid: List[Sequence[Any]]) -> List[RawRow]:
    """Flatten the sheet grid (header included) into one raw row per meal cell."""
    rows: List[RawRow] = []
    for line in grid[1:]:
        day = _cell(line, 0)
        if not day:
            continue
        for meal, desc_idx, price_idx in MEAL_COLUMNS:
            description = _cell(line, desc_idx)
            price = _cell(line, price_idx)
            if description is None or price is None:
                continue
            rows.append((day, meal.value, description, price))
    return rows


def _read_xlsx(content: bytes) -> List[Sequence[Any]]:
    try:
        workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, OSError, KeyError, ValueError) as exc:
        raise ValidationError(f"Could not read workbook: {exc}", field="file") from exc
    try:
        sheet = workbook.worksheets[0]
        return [list(row) for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()


def _read_csv(content: bytes) -> List[Sequence[Any]]:
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ValidationError("CSV upload must be UTF-8 encoded", field="file") from exc
    return list(csv.reader(io.StringIO(text)))


def parse_menu_upload(filename: str, content: bytes) -> List[RawRow]:
    ext = os.path.splitext(filename or "")[1].lower()
    if ext not in ALLOWED_EXTS:
        raise ValidationError("Unsupported file type. Allowed: xlsx, csv", field="file")
    if not content:
        raise ValidationError("No file uploaded.", field="file")

    grid = _read_xlsx(content) if ext == ".xlsx" else _read_csv(content)
    return rows_from_grid(grid)
