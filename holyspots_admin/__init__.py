"""HolySpots Admin.

Administrative service for the HolySpots multilingual content backend
(countries, cities, spots, routes, events and users).

High-level architecture
-----------------------

The remote backend is a managed table API (query/insert/update/delete over
HTTP). This package never owns that data; it composes queries against it and
exposes the dashboard operations as a JSON API.

Core subpackages
----------------

- ``holyspots_admin.core.catalog``:

  - Static column descriptors per table, tagged by ``ColumnKind``.
  - Join-table descriptors for the spot/route/event many-to-many relations.

- ``holyspots_admin.backend``:

  - ``TableQuery``, a declarative filter/order/range/select description.
  - ``BackendClient``, a thin async HTTP client for the table API.

- ``holyspots_admin.core.services``:

  - Page queries with search, per-column filters, sorting and foreign key
    enrichment.
  - Record CRUD and relation synchronization.

- ``holyspots_admin.core.database``:

  - Local key-value store for per-client UI preferences.

- ``holyspots_admin.server``:

  - FastAPI application and routers.
"""
