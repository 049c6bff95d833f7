import pytest

BASE_RC = (
    "PROJECT_NAME=overleaf\n"
    "SHARELATEX_DATA_PATH=data/sharelatex\n"
    "SHARELATEX_LISTEN_IP=127.0.0.1\n"
    "SHARELATEX_PORT=8080\n"
)


@pytest.fixture
def toolkit_root(tmp_path):
    """A toolkit checkout with an initialized config directory."""
    root = tmp_path / "toolkit"
    (root / "lib" / "config-seed").mkdir(parents=True)
    (root / "config").mkdir()

    (root / "lib" / "config-seed" / "version").write_text("4.3.0\n", encoding="utf-8")
    (root / "lib" / "config-seed" / "overleaf.rc").write_text(BASE_RC, encoding="utf-8")
    (root / "lib" / "config-seed" / "variables.env").write_text("REDIS_HOST=redis\n", encoding="utf-8")

    (root / "config" / "version").write_text("4.2.9\n", encoding="utf-8")
    (root / "config" / "overleaf.rc").write_text(BASE_RC, encoding="utf-8")
    return root.resolve()
