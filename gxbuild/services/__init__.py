"""Build, revision and packaging services."""
