'''
Strict record classes that prevent dynamic attribute assignment
'''


class StrictRecord:
    '''Base class that only allows annotated attributes

    Subclasses declare their fields with type annotations; the constructor
    takes them as keyword arguments and rejects anything else.
    '''
    _allowed_attrs_: frozenset[str]

    def __init_subclass__(cls):
        ann = getattr(cls, '__annotations__', {})
        cls._allowed_attrs_ = frozenset(ann.keys())

    def __init__(self, **fields):
        missing = self._allowed_attrs_ - fields.keys()
        if missing:
            raise TypeError(f"Missing fields: {', '.join(sorted(missing))}")

        for name, value in fields.items():
            setattr(self, name, value)

    def __setattr__(self, name, value):
        if name not in self._allowed_attrs_:
            raise AttributeError(f"Unknown attribute {name!r}")

        return object.__setattr__(self, name, value)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented

        return all(getattr(self, n) == getattr(other, n) for n in self._allowed_attrs_)

    def __repr__(self):
        fields = ', '.join(f'{n}={getattr(self, n)!r}' for n in sorted(self._allowed_attrs_))
        return f'{type(self).__name__}({fields})'


class WrapperSource(StrictRecord):
    '''Generated launcher source and the parameters it was built with'''
    text: str
    token: str
    interpreter: str


class Artifact(StrictRecord):
    '''Compiled executable produced by a conversion'''
    path: str
    size: int


__all__ = [
    'StrictRecord',
    'WrapperSource',
    'Artifact',
]
