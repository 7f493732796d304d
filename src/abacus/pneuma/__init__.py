"""
Pneuma - On-chain interaction layer for Abacus.

Provides the wallet provider request surface, typed chain queries, ABI
encoding and pending-transaction handling.

Uses httpx + eth-abi + eth-hash instead of the heavyweight web3.py.
"""
