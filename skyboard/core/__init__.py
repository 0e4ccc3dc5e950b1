"""Weather domain: entities, providers and services."""
