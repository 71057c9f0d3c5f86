"""Tests for compact grant parsing and expansion."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from neo_acl.core.exceptions import InvalidGrantError, ValidationError
from neo_acl.features.acl.entities.grants import CompactGrant, GrantCall
from neo_acl.features.acl.services.grant_demultiplexer import GrantDemultiplexer


@pytest.fixture
def mutations():
    service = MagicMock()
    service.allow = AsyncMock()
    return service


@pytest.fixture
def demultiplexer(mutations):
    return GrantDemultiplexer(mutations)


BLOG_GRANTS = [
    {
        "roles": ["guest", "member"],
        "allows": [
            {"resources": "blogs", "permissions": "get"},
            {"resources": ["forums", "news"], "permissions": ["get", "put", "delete"]},
        ],
    },
    {
        "roles": ["gold", "silver"],
        "allows": [
            {"resources": "cash", "permissions": ["sell", "exchange"]},
        ],
    },
]


class TestParse:
    """Tests for grant document validation."""

    def test_single_values_become_lists(self):
        grants = GrantDemultiplexer.parse({"roles": "guest", "allows": [{"resources": "blogs", "permissions": 7}]})

        assert grants == [CompactGrant(roles=["guest"], allows=[{"resources": ["blogs"], "permissions": ["7"]}])]

    def test_models_pass_through(self):
        grant = CompactGrant(roles=["guest"], allows=[])

        assert GrantDemultiplexer.parse([grant]) == [grant]

    @pytest.mark.parametrize("document", [
        {"allows": []},
        {"roles": [], "allows": []},
        {"roles": "guest", "allows": [{"resources": "blogs"}]},
        {"roles": "guest", "allows": [{"resources": [], "permissions": "get"}]},
        {"roles": "guest", "allows": "blogs"},
    ])
    def test_malformed_documents(self, document):
        with pytest.raises(InvalidGrantError) as exc_info:
            GrantDemultiplexer.parse(document)

        assert isinstance(exc_info.value, ValidationError)
        assert exc_info.value.details["errors"]

    def test_non_iterable_input(self):
        with pytest.raises(InvalidGrantError):
            GrantDemultiplexer.parse(42)


class TestDemultiplex:
    """Tests for expansion into primitive calls."""

    def test_one_call_per_resource_grant_in_order(self):
        calls = GrantDemultiplexer.demultiplex(GrantDemultiplexer.parse(BLOG_GRANTS))

        assert calls == [
            GrantCall(roles=["guest", "member"], resources=["blogs"], permissions=["get"]),
            GrantCall(roles=["guest", "member"], resources=["forums", "news"], permissions=["get", "put", "delete"]),
            GrantCall(roles=["gold", "silver"], resources=["cash"], permissions=["sell", "exchange"]),
        ]

    @pytest.mark.asyncio
    async def test_apply_calls_allow_sequentially(self, demultiplexer, mutations):
        count = await demultiplexer.apply(BLOG_GRANTS)

        assert count == 3
        assert [call.args for call in mutations.allow.await_args_list] == [
            (["guest", "member"], ["blogs"], ["get"]),
            (["guest", "member"], ["forums", "news"], ["get", "put", "delete"]),
            (["gold", "silver"], ["cash"], ["sell", "exchange"]),
        ]

    @pytest.mark.asyncio
    async def test_apply_stops_on_first_failure(self, demultiplexer, mutations):
        mutations.allow.side_effect = [None, RuntimeError("backend down"), None]

        with pytest.raises(RuntimeError):
            await demultiplexer.apply(BLOG_GRANTS)

        assert mutations.allow.await_count == 2
