"""Core quoting, escaping and code-generation modules."""
