"""Helper module that does not follow the definition layout."""

ITEMS = []
