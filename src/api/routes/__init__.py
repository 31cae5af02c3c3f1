"""API routes for hookrelay."""
