# ABOUTME: Core ingestion pipeline: processor registry, coordinator, and batch runner.
# ABOUTME: Import from the submodules directly; this package re-exports nothing.
