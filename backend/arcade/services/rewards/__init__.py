"""Rewards: tier evaluation, badge catalog, ledger and the issuance queue."""
