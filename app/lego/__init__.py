"""
LEGO catalog package.

This package holds the data-access layer (``store``) for the two
catalog tables, themes and sets, along with the routers that expose it:
``router`` renders server-side HTML pages under ``/lego`` and ``api``
serves the same operations as JSON under ``/api/lego``. The store is
created once by the application factory and handed to the routes
through ``dependencies.get_store``.
"""

from .api import router as api_router  # noqa: F401
from .router import router as pages_router  # noqa: F401
from .store import CatalogStore  # noqa: F401
