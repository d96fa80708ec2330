"""Query, lookup, stats and tool services over a DatasetStore."""
