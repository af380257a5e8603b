"""Domain value objects."""

from backoffice.domain.value_objects.identity import CallerIdentity

__all__ = ["CallerIdentity"]
