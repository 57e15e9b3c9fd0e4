"""GraphQL service exposing scenario calculations."""
