"""Core services: name resolution, aggregation, monthly projection, ingestion."""
