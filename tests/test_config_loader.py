import json

import pytest

from ghg_sunburst.cli.config_loader import ConfigLoader

@pytest.fixture
def loader():
    return ConfigLoader()

def test_defaults_leave_share_basis_open(loader):
    config = loader.get_default_config()
    assert "share_basis" not in config
    assert config["chart_diameter"] == 800
    assert config["label_overrides"] == {}

def test_cli_flags_override_file(loader, tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"theme": "system-change-lab", "chart_diameter": 600, "outer_font": 11}))

    config = loader.load_and_merge_config(str(path), {"diameter": 700, "theme": None})

    assert config["chart_diameter"] == 700
    assert config["theme"] == "system-change-lab"
    assert config["outer_font"] == 11

def test_args_to_config_maps_names(loader):
    config = loader.args_to_config({
        "share_basis": "absolute", "measure": "font", "diameter": None, "output": "x.svg",
    })
    assert config == {"share_basis": "absolute", "text_measurer": "font"}

def test_invalid_config_file(loader, tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]")
    with pytest.raises(ValueError, match="JSON object"):
        loader.load_config_file(str(path))

    with pytest.raises(ValueError, match="Failed to load config file"):
        loader.load_and_merge_config(str(tmp_path / "missing.json"), {})

def test_validate_config(loader):
    assert loader.validate_config(loader.get_default_config()) == []

    config = loader.get_default_config()
    config.update({
        "theme": "neon",
        "chart_diameter": -5,
        "label_overrides": {"rail": "sideways"},
        "sector_colors": {"aviation": "not-a-colour"},
    })
    issues = loader.validate_config(config)

    assert any("theme" in issue for issue in issues)
    assert any("chart_diameter" in issue for issue in issues)
    assert any("rail" in issue for issue in issues)
    assert any("aviation" in issue for issue in issues)
