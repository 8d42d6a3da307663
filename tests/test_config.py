import pytest

from statusd.config import Config, Section, default_config

SAMPLE = """
[StatusServer]
Host = 0.0.0.0
Port = 50052

[chatservers]
Name = chatserver1,chatserver2

[VarifyServer]
Host = 127.0.0.1
Port = 50051
"""


def test_parse_reads_sections_and_values():
    config = Config.parse(SAMPLE)
    assert config["StatusServer"]["Host"] == "0.0.0.0"
    assert config["StatusServer"]["Port"] == "50052"
    assert config["chatservers"]["Name"] == "chatserver1,chatserver2"


def test_missing_key_reads_empty():
    config = Config.parse(SAMPLE)
    assert config["StatusServer"]["Nope"] == ""
    assert "Nope" not in config["StatusServer"]


def test_missing_section_is_empty():
    config = Config.parse(SAMPLE)
    section = config["Redis"]
    assert len(section) == 0
    assert section["Host"] == ""
    assert "Redis" not in config


def test_keys_are_case_sensitive():
    config = Config.parse(SAMPLE)
    assert config["VarifyServer"]["host"] == ""
    assert config["VarifyServer"]["Host"] == "127.0.0.1"


def test_sections_and_keys_are_sorted():
    config = Config.parse("[b]\nz = 1\na = 2\n[a]\nk = v\n")
    assert list(config) == ["a", "b"]
    assert list(config["b"]) == ["a", "z"]


def test_values_are_not_interpolated():
    config = Config.parse("[s]\nv = 100%(x)s\n")
    assert config["s"]["v"] == "100%(x)s"


def test_default_section_is_not_merged():
    config = Config.parse("[DEFAULT]\nshared = 1\n[other]\nown = 2\n")
    assert config["DEFAULT"]["shared"] == "1"
    assert "shared" not in config["other"]


def test_missing_section_header_is_rejected():
    with pytest.raises(ValueError):
        Config.parse("key = value\n")


def test_duplicate_key_is_rejected():
    with pytest.raises(ValueError):
        Config.parse("[s]\nk = 1\nk = 2\n")


def test_section_direct_lookup():
    section = Section({"Host": "localhost"})
    assert section["Host"] == "localhost"
    assert section["Port"] == ""


def test_load_round_trip(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text(SAMPLE, encoding="utf-8")
    assert Config.load(path) == Config.parse(SAMPLE)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.load(tmp_path / "absent.ini")


def test_default_config_reads_working_directory_once(tmp_path, monkeypatch):
    (tmp_path / "config.ini").write_text(SAMPLE, encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    default_config.cache_clear()
    try:
        first = default_config()
        assert first["StatusServer"]["Port"] == "50052"
        assert default_config() is first
    finally:
        default_config.cache_clear()