"""HTTP routes for the catalog and health checks."""
