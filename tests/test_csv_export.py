import csv
import io
from datetime import date

from client.csv_export import CSV_HEADERS, build_csv, export_filename, write_csv
from models.analysis import AnalysisResult
from models.image_record import ImageRecord


def _record(title='He said "hi", then left', file_name="a.jpg", category_id=13):
    analysis = AnalysisResult(
        title=title,
        description="Two friends wave goodbye, smiling.",
        keywords="friends,goodbye,smile",
        category_id=category_id,
    )
    return ImageRecord(file_name=file_name, analysis=analysis)


def test_quotes_and_commas_round_trip():
    text = build_csv([_record()])

    assert '"He said ""hi"", then left"' in text
    rows = list(csv.reader(io.StringIO(text)))
    assert rows[0] == CSV_HEADERS
    assert rows[1] == [
        "a.jpg",
        'He said "hi", then left',
        "Two friends wave goodbye, smiling.",
        "friends,goodbye,smile",
        "13",
    ]


def test_every_cell_is_quoted_and_no_trailing_newline():
    text = build_csv([_record(title="Plain", category_id=None)])

    assert text.splitlines() == [
        '"Filename","Title","Description","Keywords","Category"',
        '"a.jpg","Plain","Two friends wave goodbye, smiling.","friends,goodbye,smile",""',
    ]
    assert not text.endswith("\n")


def test_pending_record_exports_empty_cells():
    rows = list(csv.reader(io.StringIO(build_csv([ImageRecord(file_name="wait.png")]))))
    assert rows[1] == ["wait.png", "", "", "", ""]


def test_filename_includes_date():
    assert export_filename(date(2026, 10, 18)) == "image-analysis-2026-10-18.csv"


def test_write_csv_is_utf8(tmp_path):
    target = write_csv([_record(title="Café terrace at dusk")], tmp_path / "out", today=date(2026, 1, 2))

    assert target.name == "image-analysis-2026-01-02.csv"
    assert "Café terrace at dusk" in target.read_text(encoding="utf-8")
