"""
Merges fetched pages into the displayed list.
"""
import logging

logger = logging.getLogger(__name__)


class ListReconciler:
    """
    Keeps the displayed list of one screen, keyed by ``key_field``.

    Replace installs exactly the fetched page; append adds the items whose
    key is not already present. Server order is kept in both cases.
    """

    def __init__(self, key_field='s_no'):
        self.key_field = key_field
        self._items = []
        self._keys = set()

    @property
    def items(self):
        return list(self._items)

    @property
    def keys(self):
        return [self.key_of(item) for item in self._items]

    def __len__(self):
        return len(self._items)

    def key_of(self, item):
        return item.get(self.key_field)

    def replace(self, items):
        self._items = []
        self._keys = set()
        return self._extend(items)

    def append(self, items):
        return self._extend(items)

    def clear(self):
        self._items = []
        self._keys = set()

    def _extend(self, items):
        added = []
        for item in items:
            key = self.key_of(item)
            if key is not None and key in self._keys:
                logger.debug(f"Skipping duplicate {self.key_field}={key}")
                continue
            if key is not None:
                self._keys.add(key)
            self._items.append(item)
            added.append(item)
        return added
