"""Machine definitions, diagram model, builder and plain Mermaid syntax."""
