"""Market data ingestion and normalization package.

Modules here talk to the external market sources and turn their raw payloads
into the canonical records consumed by fetchers and screens: spot crypto
prices, perpetual futures, prediction markets and news.
"""

__all__: list[str] = []
