"""Core building blocks: API client, tree engine and materializer."""
