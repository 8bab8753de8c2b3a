"""Skiplist-backed sorted set and score borders."""