"""Version value objects returned by the version factory."""

import json
import re
from dataclasses import asdict, dataclass, field
from typing import Any, ClassVar, Dict, Optional, Union

from .exceptions import VersionValidationError

STABILITY_STABLE = "stable"
STABILITY_BETA = "beta"
STABILITY_ALPHA = "alpha"
STABILITY_DEV = "dev"
STABILITY_PATCH = "patch"
STABILITY_RC = "RC"

STABILITIES = (
    STABILITY_STABLE,
    STABILITY_BETA,
    STABILITY_ALPHA,
    STABILITY_DEV,
    STABILITY_PATCH,
    STABILITY_RC,
)

VERSION_FIELDS = ("major", "minor", "micro", "patch", "micropatch", "stability", "build")
NUMERIC_FIELDS = ("major", "minor", "micro", "patch", "micropatch", "build")

DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Version:
    """A version extracted from text or rebuilt from structured data.

    Numeric components are kept as the digit strings they were read from,
    so values like ``"03"`` survive unchanged.
    """

    major: str
    minor: str = "0"
    micro: str = "0"
    patch: Optional[str] = None
    micropatch: Optional[str] = None
    stability: str = STABILITY_STABLE
    build: Optional[str] = None

    found: ClassVar[bool] = True

    def __post_init__(self) -> None:
        """Validate the version invariants."""
        if self.major is None:
            raise VersionValidationError("Version major cannot be empty")

        if self.minor is None or self.micro is None:
            raise VersionValidationError(
                "Version minor and micro cannot be empty",
                details={"minor": self.minor, "micro": self.micro},
            )

        for name in NUMERIC_FIELDS:
            value = getattr(self, name)
            if value is not None and not (isinstance(value, str) and DIGITS.fullmatch(value)):
                raise VersionValidationError(
                    f"Version field '{name}' must be decimal digits: {value!r}",
                    details={name: value},
                )

        if self.stability not in STABILITIES:
            raise VersionValidationError(
                f"Unknown stability: {self.stability}",
                details={"stability": self.stability},
            )

    def get_version(self) -> str:
        """Render the canonical version string.

        Returns:
            ``major.minor.micro`` followed by ``.patch``, ``.micropatch``,
            ``-stability`` and ``+build`` when present
        """
        version = f"{self.major}.{self.minor}.{self.micro}"

        if self.patch is not None:
            version += f".{self.patch}"

        if self.micropatch is not None:
            version += f".{self.micropatch}"

        if self.stability != STABILITY_STABLE:
            version += f"-{self.stability}"

        if self.build is not None:
            version += f"+{self.build}"

        return version

    def is_beta(self) -> bool:
        return self.stability == STABILITY_BETA

    def is_alpha(self) -> bool:
        return self.stability == STABILITY_ALPHA

    def to_dict(self) -> Dict[str, Any]:
        """Fields as the mapping accepted by ``VersionFactory.from_array``."""
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    def __str__(self) -> str:
        return self.get_version()

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class NullVersion:
    """Result used when no version could be located or extracted.

    Exposes the same read surface as ``Version`` with every answer ``None``.
    """

    major: Optional[str] = field(default=None, init=False)
    minor: Optional[str] = field(default=None, init=False)
    micro: Optional[str] = field(default=None, init=False)
    patch: Optional[str] = field(default=None, init=False)
    micropatch: Optional[str] = field(default=None, init=False)
    stability: Optional[str] = field(default=None, init=False)
    build: Optional[str] = field(default=None, init=False)

    found: ClassVar[bool] = False

    def get_version(self) -> None:
        return None

    def is_beta(self) -> None:
        return None

    def is_alpha(self) -> None:
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {name: None for name in VERSION_FIELDS}

    def to_json(self) -> str:
        return "null"

    def __str__(self) -> str:
        return ""

    def __bool__(self) -> bool:
        return False


VersionResult = Union[Version, NullVersion]
