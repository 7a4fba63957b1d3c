"""Key-value cache served over HTTP with a pluggable storage backend."""
