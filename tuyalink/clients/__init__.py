"""
Clients for the Tuya cloud API.

- ``auth``: access token acquisition.
- ``dispatcher``: signed request dispatch and response classification.
- ``pagination``: cursor-based device listing.
- ``cloud``: the high-level ``Client`` with device operations.
"""
