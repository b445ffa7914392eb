"""Top-level package for the Glass market dashboard core.

Subpackages mirror the runtime layers: ``config`` loads settings, ``data_feed``
talks to the external market sources and normalizes their payloads,
``sources`` owns the per-source fetch lifecycle, ``team`` holds the selection
engine, and ``interfaces`` renders screens for a terminal.
"""

__all__: list[str] = []
