"""Reconcile pass for regwatch.

Submodules:
    reconciler  -- Classifies each watched entity as baseline, changed or
                   unchanged and builds the next state mapping.
"""

from regwatch.reconcile.reconciler import reconcile

__all__ = ["reconcile"]
