"""Connectors: adapters de borda para APIs externas.

Estrutura:
- apperian/: Apperian EASE (JSON-RPC) e REST v1/v2
"""

__all__: list[str] = []
