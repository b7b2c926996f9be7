"""CLI do publicador Apperian (`apperian-publish`, `python -m app.cli`)."""
