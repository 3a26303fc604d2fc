"""newsboard: a social news aggregator API."""
