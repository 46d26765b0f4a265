"""
Object placement scopes.

An ObjectScope names where an object lives independently of the device it
will be sent to: the local vsys, Panorama's shared location, a device-group,
or a rulebase. The address resolver turns a scope into a concrete XPath
using the session snapshot.
"""

from enum import Enum
from typing import Optional


class RulebasePhase(Enum):
    """Rulebase a rule belongs to."""

    PRE = "pre"
    POST = "post"
    LOCAL = "local"


class ScopeType(Enum):
    """Kind of placement an ObjectScope describes."""

    LOCAL = "local"
    SHARED = "shared"
    DEVICE_GROUP = "device-group"
    RULEBASE = "rulebase"


class ObjectScope:
    """Immutable placement value."""

    __slots__ = ("_type", "_device_group", "_phase", "_shared")

    def __init__(
        self,
        scope_type: ScopeType,
        device_group: Optional[str] = None,
        phase: Optional[RulebasePhase] = None,
        shared: bool = False,
    ):
        if scope_type is ScopeType.DEVICE_GROUP and not device_group:
            raise ValueError("A device-group scope needs a device-group name")
        if scope_type is ScopeType.RULEBASE and phase is None:
            raise ValueError("A rulebase scope needs a phase")
        if scope_type not in (ScopeType.DEVICE_GROUP, ScopeType.RULEBASE) and device_group:
            raise ValueError(f"A {scope_type.value} scope cannot carry a device-group")
        object.__setattr__(self, "_type", scope_type)
        object.__setattr__(self, "_device_group", device_group or None)
        object.__setattr__(self, "_phase", phase)
        object.__setattr__(self, "_shared", scope_type is ScopeType.SHARED or bool(shared))

    def __setattr__(self, name, value):
        raise AttributeError("ObjectScope is immutable")

    @classmethod
    def local(cls) -> "ObjectScope":
        return cls(ScopeType.LOCAL)

    @classmethod
    def shared(cls) -> "ObjectScope":
        return cls(ScopeType.SHARED)

    @classmethod
    def device_group(cls, name: str) -> "ObjectScope":
        return cls(ScopeType.DEVICE_GROUP, device_group=name)

    @classmethod
    def rulebase(
        cls, phase: RulebasePhase, device_group: Optional[str] = None, shared: bool = False
    ) -> "ObjectScope":
        return cls(ScopeType.RULEBASE, device_group=device_group, phase=phase, shared=shared)

    @property
    def type(self) -> ScopeType:
        return self._type

    @property
    def device_group_name(self) -> Optional[str]:
        return self._device_group

    @property
    def phase(self) -> Optional[RulebasePhase]:
        return self._phase

    @property
    def is_shared(self) -> bool:
        """True for the shared scope and for rulebases placed in shared."""
        return self._shared

    def _key(self):
        return (self._type, self._device_group, self._phase, self._shared)

    def __eq__(self, other):
        if not isinstance(other, ObjectScope):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        if self._type is ScopeType.DEVICE_GROUP:
            return f"ObjectScope.device_group({self._device_group!r})"
        if self._type is ScopeType.RULEBASE:
            return (
                f"ObjectScope.rulebase({self._phase.value!r}, device_group={self._device_group!r}, "
                f"shared={self._shared})"
            )
        return f"ObjectScope.{self._type.value}()"


class ScopeOptions:
    """
    Placement options accepted by every operation.

    Args:
        device_group: Device-group name (Panorama)
        shared: Place the object in shared (Panorama)
        phase: Rulebase phase for rule operations
    """

    def __init__(
        self,
        device_group: Optional[str] = None,
        shared: bool = False,
        phase: Optional[RulebasePhase] = None,
    ):
        self.device_group = device_group or None
        self.shared = shared
        if isinstance(phase, str):
            phase = RulebasePhase(phase)
        self.phase = phase

    def to_scope(self) -> ObjectScope:
        """Translate the options into an ObjectScope."""
        if self.phase is not None:
            return ObjectScope.rulebase(self.phase, self.device_group, shared=self.shared)
        if self.shared:
            return ObjectScope.shared()
        if self.device_group:
            return ObjectScope.device_group(self.device_group)
        return ObjectScope.local()

    def with_phase(self, phase: RulebasePhase) -> "ScopeOptions":
        """Return a copy of the options targeting another rulebase phase."""
        return ScopeOptions(device_group=self.device_group, shared=self.shared, phase=phase)

    def __repr__(self):
        return f"ScopeOptions(device_group={self.device_group!r}, shared={self.shared}, phase={self.phase})"
