"""Form host collaborator."""

from .local_host import Form, FormItem, ItemType, LocalFormHost

__all__ = ["Form", "FormItem", "ItemType", "LocalFormHost"]
