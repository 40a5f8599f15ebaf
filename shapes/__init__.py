# Re-export core geometry API for convenience
from .transform import (
    Transform,
    IDENTITY,
    rotate,
    scale,
    translate,
    hue,
    saturation,
    brightness,
    compose,
)
from .geometry import (
    Shape,
    Renderer,
    Primitive,
    Square,
    Circle,
    UnionShape,
    DefinedShape,
    LoopShape,
    make_square,
    make_circle,
    union,
    define_shape,
    loop_shape,
    define_shape_prob,
)
