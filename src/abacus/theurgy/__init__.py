"""
Theurgy - Command implementations for Abacus.

Each module groups top-level CLI commands:
- counter:   read, increment, decrement, reset
- divine:    owner, whoami, network, debug
- reconcile: switch-network
"""
