"""I/O layer: row sources, the table fetcher and the artifact writer."""
