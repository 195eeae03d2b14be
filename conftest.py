import pytest


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Give every test two known accounts and no real backend credentials"""
    monkeypatch.setenv("AUTH_USERS", "alice:alice-password,bob:bob-password")
    monkeypatch.setenv("AUTH_SECRET", "test-secret")
    monkeypatch.setenv("CONTENT_FACTORY_DATA_DIR", str(tmp_path / "data"))
    for name in (
        "AUTH_ENABLED",
        "AUTH_PASSWORD",
        "AUTH_SESSION_MAX_AGE_SECONDS",
        "AUTH_DEFAULT_USER",
        "AUTH_OPEN_PATHS",
        "LLM_PROVIDER",
        "OPENAI_API_KEY",
        "COZE_API_KEY",
        "COZE_BOT_ID",
        "COZE_MODE",
    ):
        monkeypatch.delenv(name, raising=False)
