import dataclasses
import shlex
import typing

from .element import Element


class Config(Element):
    default_resolver: typing.ClassVar[list[str]] = ["dep", "ensure"]

    vendor_directory: str = "vendor"
    lock_file: str = "Gopkg.lock"
    resolver: list[str] | str = dataclasses.field(
        default_factory=lambda: list(Config.default_resolver)
    )

    @property
    def resolver_command(self) -> list[str]:
        if isinstance(self.resolver, str):
            return shlex.split(self.resolver)
        return list(self.resolver)

    @property
    def resolver_name(self) -> str:
        return shlex.join(self.resolver_command)
