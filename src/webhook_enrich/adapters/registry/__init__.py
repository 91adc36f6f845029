from .marketo import MarketoAdapter

__all__ = ["MarketoAdapter"]
