"""Engine configuration: relation resolution and invalid-input hooks."""

from dataclasses import dataclass
from typing import Callable

InvalidEntityHandler = Callable[[str], None]
InvalidRelHandler = Callable[[str, str], None]
InvalidRelDataHandler = Callable[[str, str], None]
NonexistentResourceHandler = Callable[[str, str], None]


def _ignore(*args: str) -> None:
    return None


@dataclass(frozen=True)
class Options:
    """Options for an engine.

    The hooks are called when part of an action is skipped because of invalid
    input. They observe; their return value is ignored and they cannot change
    what the engine does.

    Attributes:
        resolve_rel_from_entity: Allow relation references to name the
            related entity instead of the relation key.
        on_invalid_entity: Called with ``(entity)`` for unknown entities.
        on_invalid_rel: Called with ``(entity, rel)`` for relation references
            that are unknown or ambiguous.
        on_invalid_rel_data: Called with ``(entity, rel)`` when relation data
            arrives through plain attribute data.
        on_nonexistent_resource: Called with ``(entity, id)`` when a
            referenced resource does not exist.
    """

    resolve_rel_from_entity: bool = True
    on_invalid_entity: InvalidEntityHandler = _ignore
    on_invalid_rel: InvalidRelHandler = _ignore
    on_invalid_rel_data: InvalidRelDataHandler = _ignore
    on_nonexistent_resource: NonexistentResourceHandler = _ignore
