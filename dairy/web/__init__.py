"""Web layer helpers: request-scoped dependencies and error handlers."""
