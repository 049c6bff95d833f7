import pytest

from overleaf_toolkit.errors import ConfigurationError
from overleaf_toolkit.services.config_loader import ConfigLoader


class DummyLogger:
    def debug(self, *_args, **_kwargs):
        return None


def test_config_loader_reads_rc_file(tmp_path):
    config_file = tmp_path / "overleaf.rc"
    config_file.write_text(
        "#### Overleaf RC ####\n"
        "\n"
        "PROJECT_NAME=overleaf\n"
        "export MONGO_ENABLED=true\n"
        "SHARELATEX_DATA_PATH='data/share latex'  # quoted\n"
        'REDIS_ENABLED="false"\n',
        encoding="utf-8",
    )

    loaded = ConfigLoader(logger=DummyLogger()).load(str(config_file))

    assert loaded.get("PROJECT_NAME") == "overleaf"
    assert loaded.flag("MONGO_ENABLED") is True
    assert loaded.flag("REDIS_ENABLED") is False
    assert loaded.get("SHARELATEX_DATA_PATH") == "data/share latex"


def test_config_loader_ignores_unknown_keys(tmp_path):
    config_file = tmp_path / "overleaf.rc"
    config_file.write_text("SOMETHING_ELSE=1\nSERVER_PRO=true\n", encoding="utf-8")

    loaded = ConfigLoader(logger=DummyLogger()).load(str(config_file))

    assert "SOMETHING_ELSE" not in loaded
    assert loaded.flag("SERVER_PRO") is True


def test_config_loader_flags_only_accept_literal_true(tmp_path):
    config_file = tmp_path / "overleaf.rc"
    config_file.write_text("MONGO_ENABLED=TRUE\nREDIS_ENABLED=yes\nNGINX_ENABLED=1\n", encoding="utf-8")

    loaded = ConfigLoader(logger=DummyLogger()).load(str(config_file))

    assert not loaded.flag("MONGO_ENABLED")
    assert not loaded.flag("REDIS_ENABLED")
    assert not loaded.flag("NGINX_ENABLED")
    assert not loaded.flag("SIBLING_CONTAINERS_ENABLED")


def test_config_loader_requires_file(tmp_path):
    with pytest.raises(ConfigurationError, match="overleaf-toolkit init"):
        ConfigLoader(logger=DummyLogger()).load(str(tmp_path / "missing.rc"))


def test_config_loader_rejects_malformed_line(tmp_path):
    config_file = tmp_path / "overleaf.rc"
    config_file.write_text("PROJECT_NAME=overleaf\nthis is not valid\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Invalid line 2"):
        ConfigLoader(logger=DummyLogger()).load(str(config_file))
