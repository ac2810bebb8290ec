"""Player statistics: the pure aggregator and its database repository."""
