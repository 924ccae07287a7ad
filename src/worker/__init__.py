"""Background workers for billing service"""
from .billing_reconciler import BillingReconcilerWorker

__all__ = ["BillingReconcilerWorker"]
