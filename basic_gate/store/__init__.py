"""Credential stores: the lookup contract and its backends."""
