"""Tests for the doctor health checks."""

from folio.diagnostics import (
    HealthStatus,
    check_config_file,
    check_posts_directory,
    check_required_packages,
    check_site_root,
    run_diagnostics,
)


def test_required_packages_are_installed():
    assert check_required_packages().status == HealthStatus.OK


def test_site_root(tmp_path):
    assert check_site_root(tmp_path).status == HealthStatus.OK
    assert check_site_root(tmp_path / "missing").status == HealthStatus.ERROR


def test_config_file_is_optional(tmp_path):
    assert check_config_file(tmp_path).status == HealthStatus.INFO


def test_broken_config_file(tmp_path):
    (tmp_path / ".folio.toml").write_text("[lint\n", encoding="utf-8")

    assert check_config_file(tmp_path).status == HealthStatus.ERROR
    assert check_posts_directory(tmp_path).status == HealthStatus.ERROR


def test_posts_directory(blog, tmp_path):
    result = check_posts_directory(blog)

    assert result.status == HealthStatus.OK
    assert result.details["count"] == 3
    assert check_posts_directory(tmp_path / "empty").status == HealthStatus.WARNING


def test_run_diagnostics(blog):
    checks = [result.check for result in run_diagnostics(blog)]

    assert checks == ["Python Version", "Required Packages", "Site Root", "Folio Config", "Posts Directory"]
