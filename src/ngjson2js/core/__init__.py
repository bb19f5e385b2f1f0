"""Core functionality: URL derivation, JSON escaping, code generation, config, logging."""
