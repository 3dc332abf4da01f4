"""Core services — HTTP transport, IAM tokens, artifact installation."""
