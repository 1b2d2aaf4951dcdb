"""Web front-end for docsite."""
