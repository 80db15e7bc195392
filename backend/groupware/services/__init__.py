"""Service layer.

Subpackages
-----------
- ``groupware.services._shared``: base service, error types and ports
  (clock, token signer, refresh token store) with their test doubles.
- ``groupware.services.refresh_tokens``: refresh token lifecycle service.

Nothing is re-exported here so that infrastructure modules can import the
ports without pulling in the services built on top of them.
"""
