"""
Dataset catalog data access.

Modules:
    repository: Async CRUD over the ``dataset`` table
    importer: Bulk CSV import
    walkthrough: Insert/query/filter/update/delete sequence end to end
"""

__all__ = [
    "DatasetRepository",
    "DatasetImporter",
    "run_walkthrough",
]
