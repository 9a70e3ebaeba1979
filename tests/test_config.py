import pytest
from pydantic_settings import SettingsConfigDict

from chunksort.config import Settings
from chunksort.sort.errors import SortConfigurationError
from chunksort.sort.sort_llm import build_oracle


def test_defaults_without_toml(tmp_path):
    class NoFileSettings(Settings):
        model_config = SettingsConfigDict(toml_file=tmp_path / "missing.toml")

    settings = NoFileSettings()
    assert settings.sort.chunk_size == 10
    assert settings.sort.extreme_k == 10
    assert settings.sort.iterations == 1
    assert settings.oracle.capacity is None


def test_toml_file_is_loaded(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        'log_level = "DEBUG"\n'
        '[oracle]\napi_key = "sk-test"\nmodel = "Qwen3-8B"\ncapacity = 30\nthink = true\n'
        '[sort]\ncriterion = "spiciness"\nextreme_k = 4\n',
        encoding="utf8",
    )

    class FileSettings(Settings):
        model_config = SettingsConfigDict(toml_file=path)

    settings = FileSettings()
    assert settings.log_level == "DEBUG"
    assert settings.sort.criterion == "spiciness"
    assert settings.sort.extreme_k == 4
    assert settings.sort.chunk_size == 10

    oracle = build_oracle(settings)
    assert oracle.model_name == "Qwen3-8B"
    assert oracle.capacity == 30
    assert oracle.qwen3


def test_missing_api_key_is_a_configuration_error(tmp_path, monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    class NoKeySettings(Settings):
        model_config = SettingsConfigDict(toml_file=tmp_path / "missing.toml")

    with pytest.raises(SortConfigurationError):
        build_oracle(NoKeySettings())


def test_api_key_falls_back_to_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")

    class NoKeySettings(Settings):
        model_config = SettingsConfigDict(toml_file=tmp_path / "missing.toml")

    oracle = build_oracle(NoKeySettings())
    assert oracle.client.api_key == "sk-from-env"
