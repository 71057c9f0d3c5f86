"""Expansion of compact grant documents into primitive grants."""

from typing import Any, Iterable, List, Mapping, Union

from pydantic import ValidationError as PydanticValidationError

from ..entities.grants import CompactGrant, GrantCall
from .mutation_service import MutationService
from ....core.exceptions.domain import InvalidGrantError

GrantDocument = Union[CompactGrant, Mapping[str, Any]]


class GrantDemultiplexer:
    """Turns compact grants into a sequence of ``allow`` calls.

    Calls run one after another. Each is its own backend batch, so a failure
    part way leaves the earlier grants in place.
    """

    def __init__(self, mutations: MutationService):
        self.mutations = mutations

    @staticmethod
    def parse(grants: Union[GrantDocument, Iterable[GrantDocument]]) -> List[CompactGrant]:
        """Validate a grant document or a list of them."""
        if isinstance(grants, (CompactGrant, Mapping)):
            grants = [grants]
        try:
            return [
                grant if isinstance(grant, CompactGrant) else CompactGrant.model_validate(grant)
                for grant in grants
            ]
        except PydanticValidationError as e:
            raise InvalidGrantError(
                "Invalid compact grant document",
                details={"errors": e.errors(include_url=False)}
            ) from e
        except TypeError as e:
            raise InvalidGrantError(f"Invalid compact grant document: {e}") from e

    @staticmethod
    def demultiplex(grants: Iterable[CompactGrant]) -> List[GrantCall]:
        """Flatten grants into one call per resource grant, in document order."""
        return [
            GrantCall(roles=grant.roles, resources=rule.resources, permissions=rule.permissions)
            for grant in grants
            for rule in grant.allows
        ]

    async def apply(self, grants: Union[GrantDocument, Iterable[GrantDocument]]) -> int:
        """Apply every grant in order.

        Returns:
            Number of ``allow`` calls issued
        """
        calls = self.demultiplex(self.parse(grants))
        for call in calls:
            await self.mutations.allow(call.roles, call.resources, call.permissions)
        return len(calls)
