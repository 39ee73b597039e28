import pytest

from agentkit.logger import configure_logging
from agentkit.tools.database import database_tools
from agentkit.tools.filesystem import filesystem_tools
from agentkit.tools.github import GitHubClient, MockGitHubTransport, github_tools


@pytest.fixture
def logger():
    return configure_logging("DEBUG", name="agentkit.tests")


@pytest.fixture
def transport():
    return MockGitHubTransport()


@pytest.fixture
async def github_client(transport, logger):
    client = GitHubClient(transport=transport, logger=logger)
    yield client
    await client.aclose()


@pytest.fixture
def github(github_client):
    return github_tools(github_client)


@pytest.fixture
def filesystem(logger):
    return filesystem_tools(logger)


@pytest.fixture
def database(logger):
    return database_tools(logger)
