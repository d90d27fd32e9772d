"""Schema-driven GraphQL query explorer."""

__version__ = "0.1.0"
