"""
Transform commands queued on a Source.

Each command is a typed option object; a :class:`CommandSet` holds at most
one command of each kind and serializes them into the JSON body sent when
the result is fetched.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Iterable, List, Union

from .errors import ValidationError
from .logging import get_logger

logger = get_logger("commands")

CONVERT_MIME_TYPES = {
    "png": "image/png",
    "jpeg": "image/jpeg",
    "webp": "image/webp",
    "avif": "image/avif",
}


class ResizeMethod(str, Enum):
    SCALE = "scale"
    FIT = "fit"
    COVER = "cover"
    THUMBNAIL = "thumb"


@dataclass(frozen=True)
class ResizeOption:
    """
    Resize parameters.

    ``scale`` takes exactly one of width or height; ``fit``, ``cover`` and
    ``thumb`` need both, each at least 1.
    """

    name: ClassVar[str] = "resize"

    method: ResizeMethod
    width: int = 0
    height: int = 0

    def validate(self):
        try:
            method = ResizeMethod(self.method)
        except ValueError:
            raise ValidationError(
                f"Unknown resize method {self.method!r}; "
                f"use one of {', '.join(m.value for m in ResizeMethod)}"
            )
        if self.width < 0 or self.height < 0:
            raise ValidationError("Resize width and height cannot be negative")
        if method is ResizeMethod.SCALE:
            if self.width != 0 and self.height != 0:
                raise ValidationError(
                    "Resize with scale method can only have either width or height set, but not both"
                )
            if self.width == 0 and self.height == 0:
                raise ValidationError(
                    "Resize with scale method cannot have width and height both set to zero"
                )
        else:
            if self.width < 1:
                raise ValidationError("Width must be >= 1")
            if self.height < 1:
                raise ValidationError("Height must be >= 1")

    def to_payload(self) -> Dict[str, Any]:
        payload = {"method": ResizeMethod(self.method).value}
        if self.width:
            payload["width"] = self.width
        if self.height:
            payload["height"] = self.height
        return payload


@dataclass(frozen=True)
class ConvertOptions:
    """Target formats as a comma-joined list of MIME types."""

    name: ClassVar[str] = "convert"

    type: str

    @classmethod
    def from_names(cls, type_names: Iterable[str]) -> "ConvertOptions":
        """
        Build convert options from short format names.

        Names missing from CONVERT_MIME_TYPES are dropped; input order is kept.

        Raises:
            ValidationError: If no names were given or none of them is known
        """
        type_names = list(type_names)
        if not type_names:
            raise ValidationError("At least one option for convert is required")

        mime_types: List[str] = []
        for type_name in type_names:
            mime_type = CONVERT_MIME_TYPES.get(type_name)
            if mime_type is None:
                logger.debug("Dropping unknown convert type %r", type_name)
                continue
            mime_types.append(mime_type)

        if not mime_types:
            raise ValidationError(
                f"None of {type_names} is a supported convert type; "
                f"use one of {', '.join(CONVERT_MIME_TYPES)}"
            )
        return cls(type=",".join(mime_types))

    def to_payload(self) -> Dict[str, Any]:
        return {"type": self.type}


@dataclass(frozen=True)
class TransformOptions:
    """Background colour replacing transparency: "white", "black" or a hex colour."""

    name: ClassVar[str] = "transform"

    background: str

    def to_payload(self) -> Dict[str, Any]:
        return {"background": self.background}


Command = Union[ResizeOption, ConvertOptions, TransformOptions]

COMMAND_TYPES = (ResizeOption, ConvertOptions, TransformOptions)


class CommandSet:
    """Pending commands, at most one per kind; setting a kind again replaces it."""

    def __init__(self):
        self._commands: Dict[str, Command] = {}

    def set(self, command: Command):
        if not isinstance(command, COMMAND_TYPES):
            raise ValidationError(f"Unsupported command: {type(command).__name__}")
        self._commands[command.name] = command

    def get(self, name: str) -> Union[Command, None]:
        return self._commands.get(name)

    def to_payload(self) -> Dict[str, Dict[str, Any]]:
        return {name: command.to_payload() for name, command in self._commands.items()}

    def __contains__(self, name: str) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list(self._commands.values())!r})"
