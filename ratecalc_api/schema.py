"""GraphQL schema: scenario calculation queries."""

import strawberry

from ratecalc.indices import index_names

from ratecalc_api.services import calculate
from ratecalc_api.types import CalculationInput, CalculationOutput


@strawberry.type
class Query:
    @strawberry.field
    def version(self) -> str:
        return "0.1.0"

    @strawberry.field
    def indices(self) -> list[str]:
        """Names of the indices trades and curves may reference."""
        return index_names()

    @strawberry.field
    def calculate(self, request: CalculationInput) -> CalculationOutput:
        """Calculate measures for FRAs and term deposits over one or more market scenarios."""
        return calculate(request)


schema = strawberry.Schema(query=Query)
