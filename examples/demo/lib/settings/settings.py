"""Shared settings object for the demo plugin tree."""

from convention_loader.factory import SharedInstanceProvider


class Demo_Lib_Settings(SharedInstanceProvider):
    """One settings object per process."""

    _instance = None

    def __init__(self, **values):
        self.values = dict(values)

    @classmethod
    def get_instance(cls, **params):
        if cls._instance is None:
            cls._instance = cls(**params)
        return cls._instance
