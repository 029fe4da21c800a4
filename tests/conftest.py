"""Shared pytest fixtures for scmfilter tests."""

import json
import logging

import pytest

from scmfilter.models.head import BranchHead, ChangeRequestHead, SCMSource, TagHead


@pytest.fixture(autouse=True)
def isolated_home(tmp_path_factory, monkeypatch):
    """Keep user configuration and git root overrides out of tests."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("SCMFILTER_GIT_ROOT", raising=False)
    return home


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration installed by CLI invocations."""
    logger = logging.getLogger("scmfilter")
    yield
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def source():
    return SCMSource(id="origin", remote="https://example.com/repo.git")


@pytest.fixture
def make_change_request():
    """Factory for change request heads with a given origin branch."""

    def _make(origin_name, number=1, target="main"):
        return ChangeRequestHead(
            name=f"PR-{number}",
            id=str(number),
            target=target,
            origin_name=origin_name,
        )

    return _make


@pytest.fixture
def mixed_heads(make_change_request):
    """Branches, tags and change requests in discovery order."""
    return [
        BranchHead(name="main"),
        TagHead(name="v1.0", timestamp=1500000000000),
        make_change_request("feature-login", number=1),
        make_change_request("hotfix-login", number=2),
        make_change_request("feature-", number=3),
    ]


@pytest.fixture
def heads_file(tmp_path):
    """JSON lines file describing the mixed heads."""
    records = [
        {"kind": "branch", "name": "main"},
        {"kind": "tag", "name": "v1.0"},
        {"kind": "change_request", "name": "PR-1", "id": "1",
         "target": "main", "origin_name": "feature-login"},
        {"kind": "change_request", "name": "PR-2", "id": "2",
         "target": "main", "origin_name": "hotfix-login"},
    ]
    f = tmp_path / "heads.jsonl"
    f.write_text("\n".join(json.dumps(r) for r in records) + "\n")
    return f
