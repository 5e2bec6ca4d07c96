"""
Lightpath Package.

Turns animated curves (poly splines, Catmull-Rom splines and particle
trails) annotated with colour gradients into a toolpath for a delta
effector and a synchronised light.  The result is a pre-computed plan of
queued movements and lighting fades, tied together by global ids.

Subpackages:
    geometry: Points, interpolation and duration model
    color: HSL values, perceptual distance and gradient compression
    curves: Curve variants and particle route ordering
    job_ir: Motion / fade / generic action vocabulary
    sequencer: Action groups (id + barrier bookkeeping) and the planner
    configs: Planner configuration loading and validation
    ingest: Blender curve exports and gradient strips -> curves
    export: Toolpath documents and viewer previews
    batch: Frame / collection folder processing
"""

__all__ = [
    "geometry",
    "color",
    "curves",
    "job_ir",
    "sequencer",
    "configs",
    "ingest",
    "export",
    "batch",
]
