from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

import teambuild_cli
from cli.args.base import MODES
from cli.dispatch import COMMANDS


def test_every_mode_has_a_command() -> None:
    assert set(COMMANDS) == set(MODES)


def test_mode_is_required() -> None:
    with pytest.raises(SystemExit) as ctx:
        teambuild_cli.parse_args([])
    assert ctx.value.code == 2


def test_ruleset_mode_with_explicit_ids(tmp_path: Path) -> None:
    out = tmp_path / "SonarQube.ruleset"

    rc = teambuild_cli.main(
        ["--mode", "ruleset", "--output", str(out), "--rule-id", "CA1000", "--rule-id", "MyCustomCheckId"]
    )

    assert rc == 0
    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines[3] == '    <Rule Id="CA1000" Action="Warning" />'
    assert lines[4] == '    <Rule Id="MyCustomCheckId" Action="Warning" />'


def test_ruleset_mode_reads_ids_file(tmp_path: Path) -> None:
    ids_file = tmp_path / "ids.txt"
    ids_file.write_text("# active checks\nCA1000\n\nCA1001\n", encoding="utf-8")
    out = tmp_path / "SonarQube.ruleset"

    rc = teambuild_cli.main(["--mode", "ruleset", "--output", str(out), "--rule-ids-file", str(ids_file)])

    assert rc == 0
    assert out.read_text(encoding="utf-8").count("<Rule Id=") == 2


def test_ruleset_mode_reports_duplicates(tmp_path: Path, capsys) -> None:
    out = tmp_path / "SonarQube.ruleset"

    rc = teambuild_cli.main(
        ["--mode", "ruleset", "--output", str(out)]
        + [arg for cid in ["CA1000", "CA1000", "CA1001", "CA1002", "CA1002", "CA1002"] for arg in ("--rule-id", cid)]
    )

    assert rc == 1
    assert not out.exists()
    assert "The following CheckId should not appear multiple times: CA1000, CA1002" in capsys.readouterr().out


def test_ruleset_mode_requires_output_and_a_source(tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="--output"):
        teambuild_cli.main(["--mode", "ruleset", "--rule-id", "CA1000"])
    with pytest.raises(SystemExit, match="--project-key"):
        teambuild_cli.main(["--mode", "ruleset", "--output", str(tmp_path / "x.ruleset")])


def test_ruleset_mode_reports_missing_quality_profile(tmp_path: Path, monkeypatch, capsys) -> None:
    from tools.sonar import runner

    monkeypatch.setattr(runner, "fetch_quality_profile_key", lambda *args: None)
    out = tmp_path / "SonarQube.ruleset"

    rc = teambuild_cli.main(["--mode", "ruleset", "--output", str(out), "--project-key", "my_project"])

    assert rc == 1
    assert not out.exists()
    assert "ERROR: No quality profile found for language 'cs'" in capsys.readouterr().out


class FakeDownloader:
    def __init__(self, user_name=None, password=None) -> None:
        self.user_name = user_name

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return None

    def try_download_if_exists(self, url: str):
        if url.endswith("/missing"):
            return False, None
        return True, f"content of {url}"

    def try_download_file_if_exists(self, url: str, target_path: Path) -> bool:
        target_path.write_text("file", encoding="utf-8")
        return True


def test_download_mode(monkeypatch, capsys) -> None:
    import cli.commands.download as download_cmd

    monkeypatch.setattr(download_cmd, "WebClientDownloader", FakeDownloader)

    assert teambuild_cli.main(["--mode", "download", "--url", "http://sonar/api/x"]) == 0
    assert "content of http://sonar/api/x" in capsys.readouterr().out

    assert teambuild_cli.main(["--mode", "download", "--url", "http://sonar/missing"]) == 1


def test_download_mode_to_file(monkeypatch, tmp_path: Path) -> None:
    import cli.commands.download as download_cmd

    monkeypatch.setattr(download_cmd, "WebClientDownloader", FakeDownloader)
    out = tmp_path / "file.txt"

    assert teambuild_cli.main(["--mode", "download", "--url", "http://sonar/f", "--output", str(out)]) == 0
    assert out.read_text(encoding="utf-8") == "file"


def test_summary_mode(monkeypatch) -> None:
    import cli.commands.summary as summary_cmd

    written: List[str] = []

    class FakeSummary:
        def __init__(self, cfg) -> None:
            self.cfg = cfg

        def __enter__(self):
            return self

        def __exit__(self, *exc_info):
            return None

        def write_message(self, message: str) -> None:
            written.append(message)

    monkeypatch.setattr(summary_cmd, "BuildSummaryLogger", FakeSummary)

    rc = teambuild_cli.main(
        [
            "--mode",
            "summary",
            "--collection-uri",
            "http://tfs/tfs/DefaultCollection",
            "--build-uri",
            "vstfs:///Build/Build/1",
            "--message",
            "first",
            "--message",
            "  ",
            "--message",
            "second",
        ]
    )

    assert rc == 0
    assert written == ["first", "second"]


def test_coverage_mode_lists_urls(monkeypatch, capsys) -> None:
    import cli.commands.coverage as coverage_cmd

    class FakeService:
        def __init__(self, cfg) -> None:
            self.cfg = cfg

        def get_coverage_report_urls(self, build_uri: str) -> List[str]:
            return [f"http://tfs/report?build={build_uri}"]

    monkeypatch.setattr(coverage_cmd, "TfsBuildService", FakeService)

    rc = teambuild_cli.main(
        ["--mode", "coverage", "--collection-uri", "http://tfs/tfs/C", "--build-uri", "vstfs:///Build/Build/1"]
    )

    assert rc == 0
    assert "http://tfs/report?build=vstfs:///Build/Build/1" in capsys.readouterr().out
