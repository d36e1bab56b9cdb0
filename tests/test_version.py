import subprocess
from importlib import metadata
from unittest.mock import patch

from tailview import version


def test_release_version_wins(monkeypatch):
    monkeypatch.setattr(version, "__version__", "1.4.0")
    with patch("tailview.version.subprocess.run") as mock_run:
        assert version.get_version() == "1.4.0"
    mock_run.assert_not_called()


@patch("tailview.version.subprocess.run")
def test_git_revision(mock_run):
    mock_run.return_value = subprocess.CompletedProcess([], 0, stdout="abc1234\n", stderr="")
    assert version.get_version() == "abc1234"


@patch("tailview.version.metadata.version", return_value="0.1.0")
@patch("tailview.version.subprocess.run", side_effect=FileNotFoundError("git"))
def test_installed_distribution_without_git(mock_run, mock_version):
    assert version.get_version() == "0.1.0"
    mock_version.assert_called_once_with("tailview")


@patch("tailview.version.metadata.version", side_effect=metadata.PackageNotFoundError("tailview"))
@patch("tailview.version.subprocess.run", side_effect=subprocess.CalledProcessError(128, "git"))
def test_fallback(mock_run, mock_version):
    assert version.get_version() == "test"
