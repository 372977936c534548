"""Fixtures shared by the test suites."""

import pytest

from smartcommit.config import Config, ConfigManager, PROVIDER_OPENAI
from smartcommit.git import GitError

from tests.helpers import FakeProvider, FakeRepository, Harness


@pytest.fixture
def environ():
    return {}


@pytest.fixture
def config_manager(tmp_path, environ):
    return ConfigManager(path=tmp_path / "smartcommit" / "config.json", environ=environ)


@pytest.fixture
def configured(config_manager):
    """A saved, complete OpenAI configuration."""
    config_manager.save(Config(provider=PROVIDER_OPENAI, openai_api_key="sk-test"))
    return config_manager


@pytest.fixture
def repo():
    return FakeRepository()


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def harness(repo, provider, configured):
    return Harness(repo, provider, configured)


@pytest.fixture
def failing_git():
    return GitError("Git command failed: git diff --cached\nfatal: bad index")
