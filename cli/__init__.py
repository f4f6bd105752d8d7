"""Command-line client for the CEP weather services."""
