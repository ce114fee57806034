"""Define type aliases purely for documentation purposes."""
import numpy as np
from typing import Sequence

# Sequences of a certain length.
Sequence2 = Sequence
Sequence3 = Sequence
Sequence4 = Sequence

# Numpy arrays of a certain shape. float implied.
Vector3 = np.ndarray # (3,)

# RGB color with channels nominally in [0, 1].
Color = np.ndarray # (3,)

# Images stored row-major with the top row first.
Image = np.ndarray # (height, width, 3)
