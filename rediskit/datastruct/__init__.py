"""Dicts, sets, linked lists, sorted sets and key locks."""