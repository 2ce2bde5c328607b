"""photon_kit.core: pixel-processing engine.

Contains the image container, colour-space kernels, the per-pixel,
convolution and compositing drivers, errors and configuration.
This module has NO dependencies on photon_kit.effects or photon_kit.registry.
Only stdlib, numpy, and PIL are allowed here.
"""
