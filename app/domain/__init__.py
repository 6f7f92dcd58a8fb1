from .owners.models import Owner
from .invoices.models import Invoice
from .invoices.counters import counters

__all__ = ("Owner", "Invoice", "counters")
