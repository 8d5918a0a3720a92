from __future__ import annotations

import pytest

import project_config


@pytest.fixture
def config_env(monkeypatch):
    def _point(path) -> None:
        monkeypatch.setenv("SUDOKU_EVO_CONFIG", str(path))
        project_config.reload()

    yield _point
    monkeypatch.delenv("SUDOKU_EVO_CONFIG", raising=False)
    project_config.reload()


def test_bundled_config_has_solver_section(monkeypatch) -> None:
    monkeypatch.delenv("SUDOKU_EVO_CONFIG", raising=False)
    project_config.reload()
    solver = project_config.get_section("solver")
    assert solver["population_size"] == 1000
    assert project_config.get_section("run_log.enabled") is False


def test_dotted_lookup_and_defaults(tmp_path, config_env) -> None:
    path = tmp_path / "config.toml"
    path.write_text('[logging]\nlevel = "DEBUG"\n', encoding="utf-8")
    config_env(path)
    assert project_config.get_section("logging.level") == "DEBUG"
    assert project_config.get_section("solver", {}) == {}
    with pytest.raises(KeyError):
        project_config.get_section("solver.population_size")


def test_config_is_cached_until_reload(tmp_path, config_env) -> None:
    path = tmp_path / "config.toml"
    path.write_text("[solver]\nrow_retries = 1\n", encoding="utf-8")
    config_env(path)
    assert project_config.get_section("solver.row_retries") == 1
    path.write_text("[solver]\nrow_retries = 2\n", encoding="utf-8")
    assert project_config.get_section("solver.row_retries") == 1
    project_config.reload()
    assert project_config.get_section("solver.row_retries") == 2


def test_missing_explicit_config_raises(tmp_path, config_env) -> None:
    config_env(tmp_path / "absent.toml")
    with pytest.raises(RuntimeError):
        project_config.get_config()
