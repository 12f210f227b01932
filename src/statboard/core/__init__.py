"""Core building blocks: configuration, errors, logging, auth, CLI."""
