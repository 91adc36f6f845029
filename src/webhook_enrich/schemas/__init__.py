from .schema_key import SchemaKey

__all__ = ["SchemaKey"]
