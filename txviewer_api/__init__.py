"""
TxViewer API - HTTP bridge for the Frontend to the Etherscan txlist API.

Provides REST endpoints for:
- Latest account transactions (GET /api/txs)
- Health checks (GET /health)
"""

__version__ = "0.1.0"
