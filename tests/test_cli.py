import logging
from datetime import date

from client import cli
from client.csv_export import export_filename
from models.analysis import AnalysisResult
from models.image_record import ImageRecord


def test_format_groups_shows_category_name():
    record = ImageRecord(
        file_name="fox.png",
        folder_path="wildlife",
        analysis=AnalysisResult(title="Red fox", description="A fox in snow.", keywords="fox,snow", category_id=1),
    )

    output = cli.format_groups({"wildlife": [record]})

    assert "== wildlife (1)" in output
    assert "category: 1 (Animals)" in output
    assert "keywords: fox, snow" in output


def test_analyze_without_images_is_noop(tmp_path, mocker, caplog):
    client_cls = mocker.patch("client.cli.AnalyzeClient")

    with caplog.at_level(logging.WARNING, logger="client.cli"):
        assert cli.main(["analyze", str(tmp_path)]) == 0

    client_cls.assert_not_called()
    assert isinstance(cli.LOGGER, logging.Logger)
    assert "No image files selected" in caplog.text


def test_analyze_writes_csv(tmp_path, make_image, mocker, capsys):
    image = make_image(tmp_path / "in" / "fox.png")
    api = mocker.MagicMock()
    api.analyze = mocker.AsyncMock(
        return_value=AnalysisResult(title="Red fox", description="A fox.", keywords="fox", category_id=1)
    )
    client_cls = mocker.patch("client.cli.AnalyzeClient")
    client_cls.return_value.__aenter__.return_value = api

    exit_code = cli.main(["analyze", str(image), "--server", "http://api", "--output-dir", str(tmp_path / "out")])

    assert exit_code == 0
    client_cls.assert_called_once_with("http://api")
    assert "Red fox" in capsys.readouterr().out
    csv_path = tmp_path / "out" / export_filename(date.today())
    assert '"fox.png","Red fox"' in csv_path.read_text(encoding="utf-8")
