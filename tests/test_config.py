from comment_analyzer.core.config import DEFAULT_REMOTE_API_BASE, load_analysis_config


def test_defaults(monkeypatch):
    for name in ("REMOTE_ENABLED", "REMOTE_API_BASE", "REMOTE_TIMEOUT", "DEMO_PASSWORD", "SAVE_REPORTS"):
        monkeypatch.delenv(name, raising=False)

    config = load_analysis_config()
    assert config.remote_enabled is False
    assert config.remote_api_base == DEFAULT_REMOTE_API_BASE
    assert config.remote_timeout == 10.0
    assert config.demo_password == "password123"
    assert config.save_reports is False


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("REMOTE_ENABLED", "yes")
    monkeypatch.setenv("REMOTE_API_BASE", "https://analysis.example/")
    monkeypatch.setenv("REMOTE_TIMEOUT", "2.5")
    monkeypatch.setenv("SAVE_REPORTS", "1")
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path))

    config = load_analysis_config()
    assert config.remote_enabled is True
    assert config.remote_api_base == "https://analysis.example"
    assert config.remote_timeout == 2.5
    assert config.save_reports is True
    assert config.output_dir == str(tmp_path)


def test_bad_timeout_falls_back(monkeypatch):
    monkeypatch.setenv("REMOTE_TIMEOUT", "soon")
    assert load_analysis_config().remote_timeout == 10.0
    monkeypatch.setenv("REMOTE_TIMEOUT", "-1")
    assert load_analysis_config().remote_timeout == 10.0
