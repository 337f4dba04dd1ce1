import json
import logging

import pytest

from ghg_sunburst.cli.__main__ import main
from ghg_sunburst.cli.argument_parser import ArgumentParser, resolve_output_format

@pytest.fixture(autouse=True)
def isolated_logs(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("GHG_SUNBURST_DEBUG", raising=False)
    yield
    logger = logging.getLogger("ghg_sunburst")
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

def test_render_sample_to_svg(tmp_path, capsys):
    output = tmp_path / "chart.svg"

    assert main(["render", "--sample", "-o", str(output)]) == 0
    assert output.exists()
    out = capsys.readouterr().out
    assert "Chart rendered successfully!" in out
    assert "transport" in out

def test_render_input_file_to_png(tmp_path):
    source = tmp_path / "hierarchy.json"
    source.write_text(json.dumps({
        "nodes": [
            {"id": "a", "name": "Alpha", "share": 70,
             "children": [{"id": "a1", "name": "Alpha one", "share": 100}]},
            {"id": "b", "name": "Beta", "share": 30},
        ],
    }))
    output = tmp_path / "chart.png"

    assert main(["render", "-i", str(source), "-o", str(output), "--theme", "our-world-in-data"]) == 0
    assert output.read_bytes().startswith(b"\x89PNG")

def test_render_refuses_to_overwrite(tmp_path, capsys):
    output = tmp_path / "chart.svg"
    output.write_text("keep me")

    assert main(["render", "--sample", "-o", str(output)]) == 1
    assert output.read_text() == "keep me"
    assert "already exists" in capsys.readouterr().err

    assert main(["render", "--sample", "-o", str(output), "--overwrite"]) == 0
    assert output.read_text() != "keep me"

def test_render_with_overrides_and_config(tmp_path):
    overrides = tmp_path / "overrides.json"
    overrides.write_text(json.dumps({"transport": "radial"}))
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"outer_font": 11}))
    output = tmp_path / "chart.svg"

    code = main([
        "render", "--sample", "-o", str(output),
        "--overrides", str(overrides), "--config", str(config),
    ])
    assert code == 0

def test_invalid_overrides_fail(tmp_path, capsys):
    overrides = tmp_path / "overrides.json"
    overrides.write_text(json.dumps({"transport": "sideways"}))

    code = main([
        "render", "--sample", "-o", str(tmp_path / "c.svg"), "--overrides", str(overrides),
    ])
    assert code == 1
    assert "sideways" in capsys.readouterr().err

def test_missing_input_fails(tmp_path, capsys):
    assert main(["info", "-i", str(tmp_path / "missing.json")]) == 1
    assert "does not exist" in capsys.readouterr().err

def test_malformed_input_fails(tmp_path, capsys):
    source = tmp_path / "bad.json"
    source.write_text(json.dumps({"rows": [["Energy", "Transport", "", 10]]}))

    assert main(["info", "-i", str(source)]) == 1
    assert "Failed to load hierarchy" in capsys.readouterr().err

def test_unknown_format_fails(tmp_path, capsys):
    assert main(["render", "--sample", "-o", str(tmp_path / "chart.bmp")]) == 1
    assert "Cannot infer output format" in capsys.readouterr().err

def test_info_prints_layout_table(capsys):
    assert main(["info", "--sample"]) == 0
    out = capsys.readouterr().out

    assert "Wedge Layout" in out
    assert "agriculture-forestry-land-use" in out
    assert "horizontal" in out
    assert "Share basis: absolute" in out

def test_cli_share_basis_beats_document(capsys):
    assert main(["info", "--sample", "--share-basis", "parent"]) == 0
    assert "Share basis: parent" in capsys.readouterr().out

def test_input_and_sample_are_exclusive():
    with pytest.raises(SystemExit):
        main(["info", "--sample", "-i", "x.json"])

def test_resolve_output_format():
    assert resolve_output_format("chart.SVG") == "svg"
    assert resolve_output_format("chart.out", "pdf") == "pdf"
    assert resolve_output_format("chart") is None

def test_validate_args_reports_bad_diameter(tmp_path):
    parser = ArgumentParser()
    args = parser.parse_args(["info", "--sample", "--diameter", "-10"])
    assert any("Diameter" in issue for issue in parser.validate_args(args))

def test_info_prints_theme_legend(capsys):
    assert main(["info", "--sample", "--theme", "our-world-in-data"]) == 0
    out = capsys.readouterr().out

    assert "Theme: our-world-in-data" in out
    assert "Legend" in out
    assert "#3B82F6" in out
