"""Report renderers — JSON, SARIF, and Rich terminal output."""
