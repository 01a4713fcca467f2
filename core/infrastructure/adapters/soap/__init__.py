"""SOAP transport adapter."""

from .transaction_client import SOAP_CONTENT_TYPE, SoapTransactionClient

__all__ = ["SOAP_CONTENT_TYPE", "SoapTransactionClient"]
