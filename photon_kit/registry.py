"""Effect auto-discovery and registration.

Scans photon_kit/effects/ for modules and collects every module-level
object of type Effect into a dict keyed by name.

Handles both normal Python (pkgutil.iter_modules) and frozen PyInstaller
binaries (where iter_modules returns nothing, falls back to explicit
imports from effects/__init__.py).
"""

import importlib
import logging
import pkgutil

from photon_kit.core.types import Effect

logger = logging.getLogger(__name__)

_registry: dict[str, Effect] = {}

# Known effect module names, fallback for frozen binaries
_EFFECT_MODULES = [
    'blending',
    'channels',
    'colour',
    'convolutions',
    'monochrome',
    'presets',
    'text',
    'transform',
]


def discover() -> dict[str, Effect]:
    """Import all effect modules and return the registry."""
    if _registry:
        return _registry

    import photon_kit.effects as pkg

    found_modules = [
        modname for _importer, modname, _ispkg in pkgutil.iter_modules(pkg.__path__) if not modname.startswith('_')
    ]

    # Frozen binary fallback: pkgutil finds nothing, use known list
    if not found_modules:
        found_modules = _EFFECT_MODULES

    for modname in found_modules:
        module = importlib.import_module(f'photon_kit.effects.{modname}')
        for obj in vars(module).values():
            if isinstance(obj, Effect):
                if obj.name in _registry and _registry[obj.name] is not obj:
                    raise RuntimeError(f'Duplicate effect name {obj.name!r} in photon_kit.effects.{modname}')
                _registry[obj.name] = obj

    logger.debug('discovered %d effects in %d modules', len(_registry), len(found_modules))
    return _registry


def get(name: str) -> Effect:
    """Get an effect by name."""
    reg = discover()
    if name not in reg:
        raise KeyError(f'Unknown effect: {name}. Available: {", ".join(sorted(reg))}')
    return reg[name]


def all_effects() -> dict[str, Effect]:
    """Return all registered effects."""
    return discover()
