"""Quality flags attached to flux measurements."""

from types import MappingProxyType


class Quality:
    """An immutable set of named quality flags.

    Collections tag every magnitude they synthesize from a color with
    ``Quality(derived=True)``.
    """

    __slots__ = ("_flags",)

    def __init__(self, **flags):
        self._flags = MappingProxyType(dict(flags))

    @property
    def flags(self):
        """Read-only mapping of flag name to value."""
        return self._flags

    @property
    def derived(self):
        """Whether the measurement was derived rather than observed."""
        return bool(self._flags.get("derived", False))

    def get(self, name, default=False):
        return self._flags.get(name, default)

    def __getitem__(self, name):
        return self._flags[name]

    def __contains__(self, name):
        return name in self._flags

    def __eq__(self, other):
        if not isinstance(other, Quality):
            return NotImplemented
        return dict(self._flags) == dict(other._flags)

    def __hash__(self):
        return hash(tuple(sorted(self._flags.items())))

    def __repr__(self):
        args = ", ".join(f"{key}={value!r}" for key, value in self._flags.items())
        return f"Quality({args})"
