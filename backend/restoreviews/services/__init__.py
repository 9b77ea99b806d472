"""Application services grouped by use case.

Import concrete services from their subpackages (``restoreviews.services.auth``,
``restoreviews.services.users`` ...). This package stays import-light because
repositories and token adapters depend on ``services._shared``.
"""
