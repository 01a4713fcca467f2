"""Consumption-check adapters."""

from .delay_consumption_check import DelayConsumptionCheck

__all__ = ["DelayConsumptionCheck"]
