"""
Governance Ledger - Source Package

An in-process governance ledger: proposals, one vote per identity per
proposal, deterministic tallies, and a single administrator who may
create and close proposals.

DESIGN PRINCIPLES:
1. Validate everything, then mutate
2. Fail early, fail visibly
3. No partial writes
4. Every mutation is audited and announced
5. Presentation and transport live outside the ledger
"""

from govledger.ledger import GovernanceLedger, create_ledger

__version__ = "1.0.0"
__author__ = "Governance Ledger Team"

__all__ = ["GovernanceLedger", "create_ledger"]
