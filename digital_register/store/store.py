# the commands a register issues to the store holding its entries


class Store:
    """A durable store of register entries.

    Streaming commands (ensure-entry, ensure-items, delete-untouched) are
    applied in the order they are issued. Registering a new register,
    dumping and digesting block until the store has finished.
    """

    def new_register(self, register):
        raise NotImplementedError

    def ensure_entry(self, register, region, key, *items):
        raise NotImplementedError

    def ensure_items(self, register, region, key, *items):
        raise NotImplementedError

    def delete_untouched(self, register, region):
        raise NotImplementedError

    def dump(self, register, path):
        raise NotImplementedError

    def digest(self, path):
        raise NotImplementedError

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
