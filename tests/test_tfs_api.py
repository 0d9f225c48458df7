from __future__ import annotations

import json
from pathlib import Path

import pytest
import requests

from tools.tfs.api import (
    TfsClient,
    parse_build_coverage,
    parse_build_detail,
    parse_build_id,
    parse_summary_markdown,
    render_summary_markdown,
)
from tools.tfs.types import BuildDetail, SummarySection, TfsConfig

COLLECTION = "http://tfs.test:8080/tfs/DefaultCollection"

BUILD_PAYLOAD = {
    "id": 42,
    "buildNumber": "Nightly_20170101.1",
    "uri": "vstfs:///Build/Build/42",
    "project": {"id": "abc", "name": "My Project"},
}

COVERAGE_PAYLOAD = {
    "value": [
        {"configuration": {"id": 7, "flavor": "Debug", "platform": "Any CPU"}, "modules": []},
        {"configuration": {"id": 8, "flavor": "Release", "platform": "x64"}},
        {"state": "no configuration"},
    ]
}


@pytest.mark.parametrize(
    ("uri", "expected"),
    [
        ("vstfs:///Build/Build/42", 42),
        ("vstfs:///Build/Build/7/", 7),
        (" vstfs:///Build/Build/1001 ", 1001),
    ],
)
def test_parse_build_id(uri: str, expected: int) -> None:
    assert parse_build_id(uri) == expected


@pytest.mark.parametrize("uri", ["", "vstfs:///Build/Build/", "not a uri"])
def test_parse_build_id_rejects_garbage(uri: str) -> None:
    with pytest.raises(ValueError):
        parse_build_id(uri)


def test_parse_build_detail() -> None:
    build = parse_build_detail(BUILD_PAYLOAD, collection_uri=COLLECTION + "/")
    assert build == BuildDetail(
        build_id=42,
        build_number="Nightly_20170101.1",
        uri="vstfs:///Build/Build/42",
        team_project="My Project",
        collection_uri=COLLECTION,
    )


def test_parse_build_detail_missing_fields() -> None:
    with pytest.raises(RuntimeError, match="Unexpected build payload"):
        parse_build_detail({"id": 1}, collection_uri=COLLECTION)


def test_parse_build_coverage_skips_entries_without_configuration() -> None:
    coverages = parse_build_coverage(COVERAGE_PAYLOAD)
    assert [(c.configuration_id, c.flavor, c.platform) for c in coverages] == [
        (7, "Debug", "Any CPU"),
        (8, "Release", "x64"),
    ]
    assert parse_build_coverage({}) == []


def _handler(request: requests.PreparedRequest):
    if request.path_url.startswith("/tfs/DefaultCollection/_apis/build/builds/42"):
        return 200, json.dumps(BUILD_PAYLOAD).encode("utf-8")
    if request.path_url.startswith("/tfs/DefaultCollection/My%20Project/_apis/test/codecoverage"):
        return 200, json.dumps(COVERAGE_PAYLOAD).encode("utf-8")
    return 404, b""


def test_client_fetches_build_and_coverage(fake_session) -> None:
    session, adapter = fake_session(_handler)
    cfg = TfsConfig(collection_uri=COLLECTION + "/", build_uri="vstfs:///Build/Build/42", access_token="tok")

    with TfsClient(cfg, session=session) as client:
        build = client.get_build(cfg.build_uri)
        coverages = client.query_build_coverage(build)

    assert build.team_project == "My Project"
    assert len(coverages) == 2

    first, second = adapter.requests
    assert first.headers["Authorization"] == "Bearer tok"
    assert "api-version=2.0" in first.url
    assert "buildId=42" in second.url
    assert "flags=1" in second.url


def test_client_without_token_sends_no_authorization(fake_session) -> None:
    session, adapter = fake_session(_handler)
    cfg = TfsConfig(collection_uri=COLLECTION, build_uri="vstfs:///Build/Build/42")

    TfsClient(cfg, session=session).get_build(cfg.build_uri)

    assert "Authorization" not in adapter.requests[0].headers


def test_client_raises_on_http_errors(fake_session) -> None:
    session, _ = fake_session(_handler)
    cfg = TfsConfig(collection_uri=COLLECTION, build_uri="vstfs:///Build/Build/99")

    with pytest.raises(requests.HTTPError):
        TfsClient(cfg, session=session).get_build(cfg.build_uri)


def test_publish_summary_writes_markdown_and_logging_command(tmp_path: Path, capsys) -> None:
    cfg = TfsConfig(
        collection_uri=COLLECTION,
        build_uri="vstfs:///Build/Build/42",
        summary_dir=tmp_path / "summary",
    )
    section = SummarySection(name="SonarTeamBuildSummary", header="SonarQube Analysis Summary", priority=200)
    build = parse_build_detail(BUILD_PAYLOAD, collection_uri=COLLECTION)

    path = TfsClient(cfg).publish_summary(build, section, ["first", "second"])

    assert path == tmp_path / "summary" / "SonarQube Analysis Summary.md"
    assert path.read_text(encoding="utf-8") == render_summary_markdown(section, ["first", "second"])
    out = capsys.readouterr().out
    assert f"##vso[task.uploadsummary]{path.resolve()}" in out


def test_render_summary_markdown() -> None:
    section = SummarySection(name="S", header="H", priority=5)
    assert render_summary_markdown(section, ["a", "b"]) == "<!-- S priority=5 -->\n- a\n- b\n"


def test_parse_build_coverage_rejects_non_numeric_configuration_id() -> None:
    with pytest.raises(RuntimeError, match="Unexpected coverage payload"):
        parse_build_coverage({"value": [{"configuration": {"id": "seven"}}]})


def test_publish_summary_keeps_earlier_messages(tmp_path: Path, capsys) -> None:
    cfg = TfsConfig(collection_uri=COLLECTION, build_uri="vstfs:///Build/Build/42", summary_dir=tmp_path)
    section = SummarySection(name="SonarTeamBuildSummary", header="SonarQube Analysis Summary", priority=200)
    build = parse_build_detail(BUILD_PAYLOAD, collection_uri=COLLECTION)
    client = TfsClient(cfg)

    client.publish_summary(build, section, ["first"])
    path = client.publish_summary(build, section, ["second", "third"])

    assert path.read_text(encoding="utf-8") == render_summary_markdown(section, ["first", "second", "third"])
    assert parse_summary_markdown(section, path.read_text(encoding="utf-8")) == ["first", "second", "third"]


def test_publish_summary_replaces_file_of_another_section(tmp_path: Path, capsys) -> None:
    cfg = TfsConfig(collection_uri=COLLECTION, build_uri="vstfs:///Build/Build/42", summary_dir=tmp_path)
    section = SummarySection(name="S", header="H", priority=5)
    (tmp_path / "H.md").write_text("<!-- Other priority=1 -->\n- stale\n", encoding="utf-8")
    build = parse_build_detail(BUILD_PAYLOAD, collection_uri=COLLECTION)

    path = TfsClient(cfg).publish_summary(build, section, ["fresh"])

    assert path.read_text(encoding="utf-8") == "<!-- S priority=5 -->\n- fresh\n"
