"""Credential extraction, verification and the Basic auth gates."""
