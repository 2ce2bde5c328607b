"""Auto-discovery of effect modules.

Every module-level Effect in a .py file of this package is auto-registered
by photon_kit.registry.discover().

The explicit imports below ensure PyInstaller includes these modules
in the frozen binary. Without them, pkgutil.iter_modules cannot find
the effect files at runtime.
"""

# PyInstaller hidden imports: keep this list in sync with effect modules
import photon_kit.effects.blending as _blending  # noqa: F401
import photon_kit.effects.channels as _channels  # noqa: F401
import photon_kit.effects.colour as _colour  # noqa: F401
import photon_kit.effects.convolutions as _convolutions  # noqa: F401
import photon_kit.effects.monochrome as _monochrome  # noqa: F401
import photon_kit.effects.presets as _presets  # noqa: F401
import photon_kit.effects.text as _text  # noqa: F401
import photon_kit.effects.transform as _transform  # noqa: F401
