"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs and fetch functions
    ├── models.py         # Canonical dataclasses
    └── normalize.py      # Raw response -> canonical models

Only ``gdd`` exists today: the remote GDD computation service.
"""
