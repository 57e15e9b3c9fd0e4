"""FastAPI app with Strawberry GraphQL."""

from fastapi import FastAPI
from strawberry.fastapi import GraphQLRouter

from ratecalc.logging import configure_logging
from ratecalc.settings import get_settings

from ratecalc_api.schema import schema

_settings = get_settings()
configure_logging(_settings.log_level, _settings.log_json)

app = FastAPI(title="Rate Calculation API", version="0.1.0")
graphql_app = GraphQLRouter(schema)
app.include_router(graphql_app, prefix="/graphql")


@app.get("/health")
def health() -> dict[str, str]:
    """Health check for load balancers."""
    return {"status": "ok"}
