"""Utilities: patterns, consistent hashing, geohash, IDs, logging."""