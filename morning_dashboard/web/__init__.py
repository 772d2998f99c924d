"""HTTP layer: handlers, routers and templates."""
