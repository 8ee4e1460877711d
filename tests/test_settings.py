import pydantic
import pytest

from make_mcp.settings import MakeSettings, load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    for key in ("MAKE_API_TOKEN", "MAKE_API_URL", "MAKE_HTTP_TIMEOUT_MS", "MAKE_LOG_LEVEL", "MAKE_SERVER_NAME"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults():
    s = MakeSettings()

    assert s.API_TOKEN == ""
    assert s.API_URL == "https://eu1.make.com/api/v2"
    assert s.HTTP_TIMEOUT_MS is None
    assert s.SERVER_NAME == "make-integration"
    assert s.LOG_LEVEL == "INFO"


def test_reads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("MAKE_API_TOKEN", "abc")
    monkeypatch.setenv("MAKE_API_URL", "https://us1.make.com/api/v2")
    monkeypatch.setenv("MAKE_HTTP_TIMEOUT_MS", "2500")

    s = load_settings()

    assert s.API_TOKEN == "abc"
    assert s.API_URL == "https://us1.make.com/api/v2"
    assert s.HTTP_TIMEOUT_MS == 2500


def test_reads_dotenv_file(tmp_path):
    (tmp_path / ".env").write_text("MAKE_API_TOKEN=from-dotenv\n", encoding="utf-8")

    assert load_settings().API_TOKEN == "from-dotenv"


def test_environment_wins_over_dotenv(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text("MAKE_API_TOKEN=from-dotenv\n", encoding="utf-8")
    monkeypatch.setenv("MAKE_API_TOKEN", "from-env")

    assert load_settings().API_TOKEN == "from-env"


def test_settings_are_immutable():
    s = MakeSettings()

    with pytest.raises(pydantic.ValidationError):
        s.API_TOKEN = "changed"
