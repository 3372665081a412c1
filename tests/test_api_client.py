"""
Unit tests for API client functionality
"""

import pytest
import requests
from unittest.mock import Mock

from renovate_pr_closer.api_client import GitHubAPIClient, GRAPHQL_URL, SEARCH_PULL_REQUESTS_QUERY


def _response(json_data=None, status_code=200, error=None):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = json_data
    if error:
        response.raise_for_status.side_effect = error
    return response


@pytest.fixture
def client():
    """Create client with mocked session."""
    client = GitHubAPIClient(token='test_token')
    client.session = Mock()
    return client


class TestClientInit:
    """Test cases for client construction."""

    def test_token_header(self):
        client = GitHubAPIClient(token='test_token')
        assert client.session.headers['Authorization'] == 'token test_token'
        assert client.session.headers['Accept'] == 'application/vnd.github.v3+json'

    def test_ignores_env_token(self, monkeypatch):
        """Test that token resolution is left to the settings loader."""
        monkeypatch.setenv('GITHUB_TOKEN', 'env_token')
        client = GitHubAPIClient()
        assert client.token is None
        assert 'Authorization' not in client.session.headers

    def test_no_token(self, monkeypatch):
        monkeypatch.delenv('GITHUB_TOKEN', raising=False)
        client = GitHubAPIClient()
        assert client.token is None
        assert 'Authorization' not in client.session.headers

    def test_retries_disabled(self):
        """Test that the mounted adapter never retries."""
        client = GitHubAPIClient(token='test_token')
        adapter = client.session.get_adapter('https://api.github.com')
        assert adapter.max_retries.total == 0


class TestPostGraphQL:
    """Test cases for post_graphql."""

    def test_returns_data(self, client):
        client.session.post.return_value = _response({'data': {'search': {'nodes': []}}})

        data = client.post_graphql('query { x }', {'a': 1})

        assert data == {'search': {'nodes': []}}
        client.session.post.assert_called_once_with(
            GRAPHQL_URL, json={'query': 'query { x }', 'variables': {'a': 1}}
        )

    def test_graphql_errors_raise(self, client):
        """Test that an errors payload is raised, not returned."""
        client.session.post.return_value = _response({'errors': [{'message': 'Bad query'}]})

        with pytest.raises(Exception, match='GraphQL query failed'):
            client.post_graphql('query { x }')

    def test_http_error_propagates(self, client):
        client.session.post.return_value = _response(
            status_code=502, error=requests.exceptions.HTTPError("502 Bad Gateway")
        )

        with pytest.raises(requests.exceptions.HTTPError):
            client.post_graphql('query { x }')


class TestSearchPullRequests:
    """Test cases for search_pull_requests."""

    def test_parses_nodes(self, client):
        nodes = [
            {
                'number': 7,
                'title': 'Update dependency foo to v2',
                'url': 'https://github.com/test/test/pull/7',
                'headRefName': 'renovate/foo-2.x',
                'author': {'login': 'renovate'},
                'commits': {'nodes': [{'commit': {'author': {'user': {'login': 'renovate[bot]'}}}}]},
                'comments': {'nodes': []},
            },
            {},
        ]
        client.session.post.return_value = _response({'data': {'search': {'nodes': nodes}}})

        prs = client.search_pull_requests('type:pr repo:test/test')

        assert [pr.number for pr in prs] == [7]
        assert prs[0].head_ref_name == 'renovate/foo-2.x'
        assert prs[0].commits[0].author_login == 'renovate[bot]'
        payload = client.session.post.call_args.kwargs['json']
        assert payload['query'] == SEARCH_PULL_REQUESTS_QUERY
        assert payload['variables'] == {'queryString': 'type:pr repo:test/test'}

    def test_query_shape(self):
        """Test the single-page limits and projected fields."""
        assert 'type: ISSUE, last: 100' in SEARCH_PULL_REQUESTS_QUERY
        assert 'commits(last: 100)' in SEARCH_PULL_REQUESTS_QUERY
        assert 'comments(last: 100)' in SEARCH_PULL_REQUESTS_QUERY
        assert 'headRefName' in SEARCH_PULL_REQUESTS_QUERY

    def test_empty_search(self, client):
        client.session.post.return_value = _response({'data': {'search': {'nodes': []}}})
        assert client.search_pull_requests('type:pr') == []


class TestMutations:
    """Test cases for update_pull_request_state and delete_ref."""

    def test_close_pull_request(self, client):
        client.session.patch.return_value = _response({})

        client.update_pull_request_state('owner', 'name', 12, 'closed')

        client.session.patch.assert_called_once_with(
            'https://api.github.com/repos/owner/name/pulls/12', json={'state': 'closed'}
        )

    def test_close_failure_raises(self, client):
        client.session.patch.return_value = _response(
            status_code=403, error=requests.exceptions.HTTPError("403 Forbidden")
        )

        with pytest.raises(requests.exceptions.HTTPError):
            client.update_pull_request_state('owner', 'name', 12, 'closed')

    def test_delete_ref(self, client):
        client.session.delete.return_value = _response(status_code=204)

        client.delete_ref('owner', 'name', 'heads/renovate/foo-2.x')

        client.session.delete.assert_called_once_with(
            'https://api.github.com/repos/owner/name/git/refs/heads/renovate/foo-2.x'
        )

    def test_delete_ref_failure_raises(self, client):
        """Test that the client itself does not swallow deletion errors."""
        client.session.delete.return_value = _response(
            status_code=422, error=requests.exceptions.HTTPError("422 Reference does not exist")
        )

        with pytest.raises(requests.exceptions.HTTPError):
            client.delete_ref('owner', 'name', 'heads/gone')

    def test_delete_ref_encodes_branch_name(self, client):
        """Test that '#' and '?' in a branch name stay part of the ref path."""
        client.session.delete.return_value = _response(status_code=204)

        client.delete_ref('o', 'r', 'heads/renovate/foo#2?x')

        client.session.delete.assert_called_once_with(
            'https://api.github.com/repos/o/r/git/refs/heads/renovate/foo%232%3Fx'
        )
