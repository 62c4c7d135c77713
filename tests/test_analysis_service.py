"""Tests for AnalysisService and the analyze_commits pipeline stage."""

import asyncio
from unittest.mock import patch

import pytest

from commitbump.config import get_default_config
from commitbump.domain.release import ReleaseType
from commitbump.domain.trace import collecting_sink
from commitbump.exit_codes import ConfigError, InvalidFormatError, MalformedVersionError
from commitbump.services.analysis_service import (
    AnalysisService,
    ReleaseContext,
    analyze_commits,
)


@pytest.fixture
def service_for():
    """Build an AnalysisService around a fake repository."""
    def build(repo, config=None):
        events, sink = collecting_sink()
        service = AnalysisService(config=config or get_default_config(), reader=repo, sink=sink)
        service.events = events
        return service
    return build


def test_patch_release_after_tag(commit, tag, fake_repo, service_for):
    base = commit("c1", "chore: release 1.2.3", minutes=0)
    fix = commit("c2", "fix: bug", minutes=1)
    docs = commit("c3", "docs: typo", minutes=2)
    repo = fake_repo([docs, fix, base, commit("c0", "feat: first", minutes=-5)],
                     tags=[tag("v1.2.3", "c1")])

    result = service_for(repo).analyze("/repo", "v{version}")

    assert result.release_type == ReleaseType.PATCH
    assert result.next_version == "1.2.4"
    assert result.commits == [docs, fix]
    assert result.last_tag.name == "v1.2.3"


def test_no_tags_bootstraps_and_scans_everything(commit, fake_repo, service_for):
    history = [commit("c1", "feat: second", minutes=1), commit("c0", "fix: first")]
    repo = fake_repo(history)

    result = service_for(repo).analyze("/repo", "v{version}")

    assert result.release_type == ReleaseType.MINOR
    assert result.next_version == "1.0.0"
    assert result.commits == history
    assert result.last_tag is None


def test_breaking_shape_bumps_major_only(commit, tag, fake_repo, service_for):
    repo = fake_repo(
        [commit("c2", "fix!: change Y", minutes=2),
         commit("c1", "feat: add X", minutes=1),
         commit("c0", "chore: release", minutes=0)],
        tags=[tag("v1.4.2", "c0")],
    )

    result = service_for(repo).analyze("/repo", "v{version}")

    assert [c.release_type for c in result.classifications] == [ReleaseType.MAJOR, ReleaseType.MINOR]
    assert result.release_type == ReleaseType.MAJOR
    assert result.next_version == "2.4.2"


def test_breaking_marker_without_type(commit, tag, fake_repo, service_for):
    repo = fake_repo(
        [commit("c1", "BREAKING CHANGE: remove old flag", minutes=1), commit("c0", "init")],
        tags=[tag("v0.1.0", "c0")],
    )

    result = service_for(repo).analyze("/repo", "v{version}")

    assert result.release_type == ReleaseType.MAJOR
    assert result.next_version == "1.1.0"


def test_malformed_tag_version_fails(commit, tag, fake_repo, service_for):
    repo = fake_repo([commit("c1", "fix: x", minutes=1), commit("c0", "init")],
                     tags=[tag("v1.2", "c0")])

    with pytest.raises(MalformedVersionError):
        service_for(repo).analyze("/repo", "v{version}")


def test_out_of_order_tags_use_commit_time(commit, tag, fake_repo, service_for):
    c0 = commit("c0", "init", minutes=0)
    c1 = commit("c1", "feat: y", minutes=1)
    c2 = commit("c2", "fix: z", minutes=2)
    repo = fake_repo([c2, c1, c0], tags=[tag("v2.0.0", "c0"), tag("v1.9.0", "c1")])

    result = service_for(repo).analyze("/repo", "v{version}")

    assert result.last_tag.name == "v1.9.0"
    assert result.commits == [c2]
    assert result.next_version == "1.9.1"


def test_no_commits_since_tag(commit, tag, fake_repo, service_for):
    c0 = commit("c0", "feat: x")
    repo = fake_repo([c0], tags=[tag("v3.1.4", "c0")])

    result = service_for(repo).analyze("/repo", "v{version}")

    assert result.commits == []
    assert result.release_type == ReleaseType.NONE
    assert result.next_version == "3.1.4"


def test_invalid_format_fails_before_repository_access(commit, fake_repo, service_for):
    repo = fake_repo([commit("c0", "init")])

    with pytest.raises(InvalidFormatError):
        service_for(repo).analyze("/repo", "v{ver}")

    assert repo.calls == []


def test_empty_tag_format_is_not_replaced_by_config(commit, fake_repo, service_for):
    repo = fake_repo([commit("c0", "fix: x")])

    with pytest.raises(InvalidFormatError):
        service_for(repo).analyze("/repo", "")

    assert repo.calls == []


def test_empty_config_is_used_as_given(commit, fake_repo):
    repo = fake_repo([commit("c0", "fix: x")])

    with patch("commitbump.services.analysis_service.load_config") as load:
        service = AnalysisService(config={}, reader=repo)
        result = service.analyze("/repo")

    load.assert_not_called()
    assert result.next_version == "1.0.0"


def test_patch_types_must_be_a_list(commit, tag, fake_repo, service_for):
    config = get_default_config()
    config["release"]["patch_types"] = "fix"
    repo = fake_repo([commit("c1", "f: odd", minutes=1), commit("c0", "init")],
                     tags=[tag("v1.0.0", "c0")])

    with pytest.raises(ConfigError):
        service_for(repo, config).analyze("/repo")


def test_tag_format_defaults_to_config(commit, tag, fake_repo, service_for):
    config = get_default_config()
    config["release"]["tag_format"] = "release-{version}"
    repo = fake_repo([commit("c1", "fix: x", minutes=1), commit("c0", "init")],
                     tags=[tag("release-2.0.0", "c0"), tag("v9.9.9", "c1")])

    result = service_for(repo, config).analyze("/repo")

    assert result.last_tag.name == "release-2.0.0"
    assert result.next_version == "2.0.1"


def test_patch_types_from_config(commit, tag, fake_repo, service_for):
    config = get_default_config()
    config["release"]["patch_types"] = ["docs"]
    repo = fake_repo([commit("c1", "docs: typo", minutes=1), commit("c0", "init")],
                     tags=[tag("v1.0.0", "c0")])

    result = service_for(repo, config).analyze("/repo")

    assert result.release_type == ReleaseType.PATCH


def test_trace_events_in_order(commit, tag, fake_repo, service_for):
    repo = fake_repo([commit("c1", "fix: x", minutes=1), commit("c0", "init")],
                     tags=[tag("v1.0.0", "c0")])
    service = service_for(repo)

    service.analyze("/repo")

    assert [e.type for e in service.events] == [
        "tag.selected",
        "history.collected",
        "commit.classified",
        "release.decided",
        "version.computed",
    ]
    assert service.events[-1].data == {"last_tag": "v1.0.0", "next_version": "1.0.1"}


def test_analyze_async(commit, tag, fake_repo, service_for):
    repo = fake_repo([commit("c1", "feat: x", minutes=1), commit("c0", "init")],
                     tags=[tag("v1.0.0", "c0")])

    result = asyncio.run(service_for(repo).analyze_async("/repo", "v{version}"))

    assert result.release_type == ReleaseType.MINOR
    assert result.next_version == "1.1.0"


def test_analyze_async_invalid_format(fake_repo, service_for):
    repo = fake_repo([])
    with pytest.raises(InvalidFormatError):
        asyncio.run(service_for(repo).analyze_async("/repo", "bad"))
    assert repo.calls == []


class TestAnalysisResult:
    """Tests for AnalysisResult serialization."""

    def test_to_plugin_data(self, commit, tag, fake_repo, service_for):
        fix = commit("c1", "fix: x", minutes=1)
        repo = fake_repo([fix, commit("c0", "init")], tags=[tag("v1.0.0", "c0")])

        data = service_for(repo).analyze("/repo").to_plugin_data()

        assert data == {"releaseType": "Patch", "commits": [fix], "nextVersion": "1.0.1"}

    def test_to_dict(self, commit, tag, fake_repo, service_for):
        repo = fake_repo([commit("c1", "feat: x", minutes=1), commit("c0", "init")],
                         tags=[tag("v1.0.0", "c0")])

        d = service_for(repo).analyze("/repo").to_dict()

        assert d["release_type"] == "Minor"
        assert d["next_version"] == "1.1.0"
        assert d["last_tag"]["name"] == "v1.0.0"
        assert d["commits"][0]["id"] == "c1"
        assert d["commits"][0]["release_type"] == "Minor"
        assert d["commits"][0]["rule"] == "minor-type"

    def test_to_dict_without_tag(self, fake_repo, service_for):
        d = service_for(fake_repo([])).analyze("/repo").to_dict()
        assert d["last_tag"] is None
        assert d["commits"] == []
        assert d["next_version"] == "1.0.0"


class TestAnalyzeCommitsStage:
    """Tests for the analyze_commits pipeline stage."""

    def test_publishes_into_context(self, commit, tag, fake_repo, service_for):
        fix = commit("c1", "fix: x", minutes=1)
        repo = fake_repo([fix, commit("c0", "init")], tags=[tag("v1.2.3", "c0")])
        context = ReleaseContext(
            working_directory="/repo",
            tag_format="v{version}",
            plugin_data={"previous": "kept"},
        )

        result = analyze_commits(context, service_for(repo))

        assert context.plugin_data["releaseType"] == "Patch"
        assert context.plugin_data["commits"] == [fix]
        assert context.plugin_data["nextVersion"] == "1.2.4"
        assert context.plugin_data["previous"] == "kept"
        assert result.next_version == "1.2.4"
        assert ("tags", "/repo") in repo.calls

    def test_invalid_format_leaves_context_untouched(self, fake_repo, service_for):
        context = ReleaseContext(working_directory="/repo", tag_format="nope")

        with pytest.raises(InvalidFormatError):
            analyze_commits(context, service_for(fake_repo([])))

        assert context.plugin_data == {}

    def test_empty_tag_format_fails_before_repository_access(self, fake_repo, service_for):
        repo = fake_repo([])
        context = ReleaseContext(working_directory="/repo", tag_format="")

        with pytest.raises(InvalidFormatError):
            analyze_commits(context, service_for(repo))

        assert repo.calls == []
        assert context.plugin_data == {}
