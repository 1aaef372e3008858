"""
Sales app: checkout, the transaction ledger and receipts.
"""
