"""CSV export of analyzed images."""

import csv
import io
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional, Union

from models.image_record import ImageRecord

CSV_HEADERS = ["Filename", "Title", "Description", "Keywords", "Category"]


def record_row(record: ImageRecord) -> List[str]:
    """Return the CSV cells for one record; pending records export empty cells."""
    analysis = record.analysis
    if analysis is None:
        return [record.file_name, "", "", "", ""]
    category = "" if analysis.category_id is None else str(analysis.category_id)
    return [record.file_name, analysis.title, analysis.description, analysis.keywords, category]


def build_csv(records: Iterable[ImageRecord]) -> str:
    """Render records as CSV text.

    Every cell is quoted and embedded quotes are doubled; rows are separated
    by `\\n` with no trailing newline.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for record in records:
        writer.writerow(record_row(record))
    return buffer.getvalue()[:-1]


def export_filename(today: Optional[date] = None) -> str:
    """Return `image-analysis-<YYYY-MM-DD>.csv` for the given (or current) date."""
    return f"image-analysis-{(today or date.today()).isoformat()}.csv"


def write_csv(records: Iterable[ImageRecord], directory: Union[str, Path], today: Optional[date] = None) -> Path:
    """Write the CSV export into `directory` and return its path."""
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    target = target_dir / export_filename(today)
    target.write_text(build_csv(records), encoding="utf-8")
    return target
