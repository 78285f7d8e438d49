"""Cluster context alias model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ContextAlias(BaseModel):
    """A kubeconfig context paired with its short display alias."""

    model_config = ConfigDict(frozen=True)

    context: str
    alias: str

    @classmethod
    def parse(cls, value: str) -> ContextAlias:
        """Parse a ``context=alias`` string.

        Raises:
            ValueError: If the value is not two non-empty parts around ``=``.
        """
        parts = [part.strip() for part in value.split("=", 1)]
        if len(parts) != 2:
            raise ValueError(f"Context format must be 'context=alias', got: {value}")
        context, alias = parts
        if not context or not alias:
            raise ValueError(f"Both context and alias must be non-empty in: {value}")
        return cls(context=context, alias=alias)
