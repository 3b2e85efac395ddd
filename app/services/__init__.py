"""
Services Package

Business logic services for Life Dashboard.

Modules:
- schema_registry: category types and their metadata fields
- field_editor: typed controls for metadata fields
- metadata_bag: schema-validated item metadata
- periods: calendar helpers for the statistics
- finance_stats / fitness_stats: dashboard aggregates
- item_ordering / todo_ordering: list ordering
- item_images: image storage lifecycle
- change_feed: server-sent change events
"""
