"""
cloudops_credentials.vault

HashiCorp Vault HTTP client implementing the credentials backend protocols.
"""

from cloudops_credentials.vault.client import VaultClient

__all__ = ["VaultClient"]
