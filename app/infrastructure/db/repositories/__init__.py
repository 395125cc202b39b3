from .invoice_repository import InvoiceRepository

__all__ = ["InvoiceRepository"]
