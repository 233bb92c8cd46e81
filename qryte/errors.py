"""Domain exceptions."""

from __future__ import annotations


class QryteError(Exception):
    """Base class for all qryte-order errors."""


class InvoiceError(QryteError):
    pass


class InvalidQuantity(InvoiceError, ValueError):
    """A quantity was not a whole number, or was below one when adding."""


class NoActiveInvoice(InvoiceError):
    """An operation needed an order in progress but none exists."""


class UnknownMenuItem(QryteError, KeyError):
    pass


class UnknownTable(QryteError, KeyError):
    pass


class InvalidTableStatus(QryteError, ValueError):
    pass


class UnknownInventoryItem(QryteError, KeyError):
    pass


class PrinterUnavailable(QryteError, RuntimeError):
    """Printer libraries, font or device could not be used."""


class UnknownOrder(QryteError, KeyError):
    pass


class InvalidStatusTransition(QryteError, ValueError):
    """A kitchen status change that the order's current state does not allow."""
