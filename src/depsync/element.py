import dataclasses
import typing
import types


@dataclasses.dataclass
class Element:
    # name of a mapping field collecting keys that match no other field
    _extra_field: typing.ClassVar[str | None] = None

    @classmethod
    def _key(cls, key: str) -> str:
        return key.rstrip("_").replace("_", "-").replace("--", "_")

    def asdict(self) -> typing.Any:
        ret = {
            self._key(k): asobj(v)
            for k, v in (
                (f.name, getattr(self, f.name))
                for f in dataclasses.fields(self)
                if f.name != self._extra_field
            )
            if v is not None
        }
        if self._extra_field:
            ret.update(asobj(getattr(self, self._extra_field) or {}))
        return ret

    @classmethod
    def fromdict(cls, d: dict[str, typing.Any]) -> typing.Self:
        return fromobj(d, cls)

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        annotations = dict(cls.__annotations__)
        for f, a in annotations.items():
            # add `None` as default value for all fields not having a default already
            if a is not dataclasses.KW_ONLY and not hasattr(cls, f):
                annotations[f] = a | None
                setattr(cls, f, None)
        if dataclasses.KW_ONLY not in annotations.values():
            annotations = {"_": dataclasses.KW_ONLY} | annotations
        cls.__annotations__ = annotations

        def __repr__(self):
            args = ", ".join(
                f"{f}={v!r}"
                for f, v in (
                    (f.name, getattr(self, f.name))
                    for f in dataclasses.fields(self)
                    if f.repr
                )
                if v is not None
            )
            return f"{type(self).__name__}({args})"

        cls.__repr__ = __repr__
        dataclasses.dataclass(cls)


def asobj(o: typing.Any):
    match o:
        case Element() as e:
            return e.asdict()
        case dict() as d:
            return {k: asobj(v) for k, v in d.items() if v is not None}
        case list() as l:
            return [asobj(x) for x in l]
        case _:
            return o


T = typing.TypeVar("T")


def fromobj(x: typing.Any, t: type[T]) -> T:
    if t is typing.Any:
        return x
    if typing.get_origin(t) is list:
        if not isinstance(x, list):
            raise ValueError(f"expected list, got {type(x).__name__}")
        item_type = typing.get_args(t)[0]
        return [fromobj(v, item_type) for v in x]
    if typing.get_origin(t) is dict:
        if not isinstance(x, dict):
            raise ValueError(f"expected dict, got {type(x).__name__}")
        key_type, value_type = typing.get_args(t)
        return {key_type(k): fromobj(v, value_type) for k, v in x.items()}
    if typing.get_origin(t) in (types.UnionType, typing.Union):
        for arg in typing.get_args(t):
            try:
                return fromobj(x, arg)
            except ValueError:
                continue
        raise ValueError(f"could not convert {x!r} to {t}")
    if t is types.NoneType or t is None:
        if x is not None:
            raise ValueError(f"expected None, got {type(x).__name__}")
        return None
    if issubclass(t, Element):
        if not isinstance(x, dict):
            raise ValueError(f"expected dict, got {type(x).__name__}")
        fields = dataclasses.fields(t)
        args = {}
        extra = {}
        for k, v in x.items():
            f = next(
                (f for f in fields if f.name != t._extra_field and t._key(f.name) == k),
                None,
            )
            if f is not None:
                args[f.name] = fromobj(v, f.type)
            elif t._extra_field:
                extra[k] = v
            else:
                raise ValueError(f"unknown field {k} in {t.__name__}")
        if t._extra_field:
            args[t._extra_field] = extra
        return t(**args)
    if t in (str, int, bool) and not isinstance(x, t):
        raise ValueError(f"expected {t.__name__}, got {type(x).__name__}")
    return t(x)
