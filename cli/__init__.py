"""Command-line client for posting readings to the weather ingest service."""
