import pytest

from utils.config_utils import (
    ConfigLoaderError,
    VisualizerSettings,
    load_config,
    load_visualizer_settings,
    validate_config,
)


def test_bundled_settings_match_defaults(monkeypatch) -> None:
    """
    Test that the bundled visualizer.yaml resolves to the default settings.
    """
    # Make sure no override path leaks in from the environment
    monkeypatch.delenv("VISUALIZER_CONFIG", raising=False)
    settings = load_visualizer_settings()

    # The shipped file mirrors the dataclass defaults
    assert settings == VisualizerSettings(frame_interval_ms=16, max_workers=2)
    assert settings.bucket_count == 10
    assert settings.animation_steps == 20


def test_settings_from_file(tmp_path) -> None:
    """
    Test reading settings from an explicit path, with unspecified values defaulted.
    """
    # Write a partial settings file
    path = tmp_path / "visualizer.yaml"
    path.write_text(
        "table:\n  bucket_count: 13\n"
        "geometry:\n  cell_width: 80\n"
        "animation:\n  animation_steps: 5\n"
    )
    settings = load_visualizer_settings(str(path))

    # Specified values are taken from the file
    assert settings.bucket_count == 13
    assert settings.cell_width == 80.0
    assert settings.animation_steps == 5

    # Unspecified values keep their defaults
    assert settings.cell_height == 30
    assert settings.padding == 5


def test_settings_path_from_environment(tmp_path, monkeypatch) -> None:
    """
    Test that VISUALIZER_CONFIG selects the settings file when no path is given.
    """
    # Point the environment at a custom file
    path = tmp_path / "env.yaml"
    path.write_text("table:\n  bucket_count: 3\n")
    monkeypatch.setenv("VISUALIZER_CONFIG", str(path))

    assert load_visualizer_settings().bucket_count == 3


def test_missing_settings_file_uses_defaults(tmp_path) -> None:
    """
    Test that a missing or empty settings file falls back to the defaults.
    """
    # No file at all
    assert load_visualizer_settings(str(tmp_path / "absent.yaml")) == VisualizerSettings()

    # An empty document
    empty = tmp_path / "empty.yaml"
    empty.write_text("")
    assert load_visualizer_settings(str(empty)) == VisualizerSettings()


@pytest.mark.parametrize(
    "body",
    [
        "table:\n  bucket_count: 0\n",
        "table:\n  bucket_count: 10\ngeometry:\n  padding: wide\n",
        "table:\n  bucket_count: true\n",
    ],
)
def test_invalid_settings_rejected(tmp_path, body) -> None:
    """
    Test that non-positive or non-numeric values are rejected.
    """
    # Write a file with one bad value
    path = tmp_path / "bad.yaml"
    path.write_text(body)

    with pytest.raises(ConfigLoaderError):
        load_visualizer_settings(str(path))


@pytest.mark.parametrize(
    "body",
    [
        "table:\n  bucket_count: 2.7\n",
        "table:\n  bucket_count: 10\nanimation:\n  animation_steps: 1.5\n",
        "table:\n  bucket_count: 10\nstore:\n  max_workers: 0.5\n",
    ],
)
def test_fractional_integer_settings_rejected(tmp_path, body) -> None:
    """
    Test that integer settings refuse fractional values instead of truncating them.
    """
    # Write a file with a fractional count
    path = tmp_path / "fractional.yaml"
    path.write_text(body)

    # The loader reports the value rather than rounding it down
    with pytest.raises(ConfigLoaderError, match="whole number"):
        load_visualizer_settings(str(path))


def test_integral_float_accepted_for_integer_setting(tmp_path) -> None:
    """
    Test that a whole-valued float is accepted for an integer setting.
    """
    # 12.0 is a whole number written as a float
    path = tmp_path / "whole.yaml"
    path.write_text("table:\n  bucket_count: 12.0\n")
    settings = load_visualizer_settings(str(path))

    assert settings.bucket_count == 12
    assert isinstance(settings.bucket_count, int)


@pytest.mark.parametrize(
    "body",
    [
        "geometry:\n  cell_width: 80\n",
        "table:\n  other: 1\n",
        "table: 10\n",
    ],
)
def test_settings_without_table_section_rejected(tmp_path, body) -> None:
    """
    Test that a settings file must define table.bucket_count.
    """
    # Write a file whose table section is absent, incomplete or not a mapping
    path = tmp_path / "no_table.yaml"
    path.write_text(body)

    with pytest.raises(ConfigLoaderError):
        load_visualizer_settings(str(path))


def test_load_config_errors(tmp_path) -> None:
    """
    Test load_config failures: missing file, broken YAML and a non-mapping document.
    """
    # A missing file without a default is an error
    with pytest.raises(ConfigLoaderError):
        load_config(str(tmp_path / "absent.yaml"))

    # Broken YAML raises unless a default is supplied
    broken = tmp_path / "broken.yaml"
    broken.write_text("table: [unclosed\n")
    with pytest.raises(ConfigLoaderError):
        load_config(str(broken))
    assert load_config(str(broken), default_config={"a": 1}) == {"a": 1}

    # A top-level list is not a configuration
    listing = tmp_path / "list.yaml"
    listing.write_text("- 1\n- 2\n")
    with pytest.raises(ConfigLoaderError):
        load_config(str(listing))


def test_validate_config() -> None:
    """
    Test that validate_config accepts complete configs and names missing keys.
    """
    # All required keys present
    validate_config({"table": {}, "geometry": {}}, ["table", "geometry"])

    # One key missing
    with pytest.raises(ConfigLoaderError, match="animation"):
        validate_config({"table": {}}, ["table", "animation"])
