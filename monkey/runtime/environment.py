"""Lexical scopes. An Environment is one frame of name bindings plus a link to the frame it is enclosed in; lookups
walk the chain outwards, writes always go to the innermost frame.

Frames are shared, not copied: every Function created in a frame keeps a reference to it, so the frame lives as long
as the longest-lived closure over it, and functions defined in the same frame see each other's later bindings.
"""


class Environment:

    def __init__(self, outer=None):
        self.store = {}
        self.outer = outer

    @classmethod
    def new_enclosed(cls, outer):
        """Returns a fresh frame whose lookups fall back to outer. Used for every function call."""
        return cls(outer)

    def get(self, name):
        """Returns the Object bound to name in the nearest frame that has it, or None if no frame does."""
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name, value):
        """Binds name to value in this frame, shadowing (never modifying) any outer binding. Returns value."""
        self.store[name] = value
        return value

    def __contains__(self, name):
        return self.get(name) is not None

    def __repr__(self):
        names = ", ".join(self.store)
        if self.outer is None:
            return f"Environment({names})"
        return f"Environment({names}) -> {self.outer!r}"
