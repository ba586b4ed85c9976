"""Command and CommandHandler base classes."""

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, dataclass_transform

from pydantic import BaseModel, ConfigDict


class Command(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)


class Result(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)


C = TypeVar("C", bound=Command)
R = TypeVar("R", bound=Result)


@dataclass_transform()
class _CommandHandlerMeta(ABCMeta):
    """Metaclass that combines ABC with auto-dataclass for subclasses."""

    def __new__(mcs, name: str, bases: tuple[type, ...], namespace: dict[str, Any]):
        cls = super().__new__(mcs, name, bases, namespace)
        if any(isinstance(b, mcs) for b in bases):
            cls = dataclass(cls)
        return cls


class CommandHandler(Generic[C, R], metaclass=_CommandHandlerMeta):
    """Base class for command handlers. Subclasses are automatically dataclasses.

    A command changes ledger state (and usually spends funds), so handlers
    are resolved per user action:
        class MyHandler(CommandHandler[MyCmd, MyResult]):
            flow: RegistrationFlow
    """

    @abstractmethod
    async def run(self, cmd: C) -> R: ...
