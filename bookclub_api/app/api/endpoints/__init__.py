"""
Endpoint subpackage.

Each module in this package defines an APIRouter for one domain
(auth, members, books, reading lists, reports, catalog).  The routers
are aggregated in ``router.py`` and then included in the application.
"""
