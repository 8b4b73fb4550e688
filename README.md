# ritk

Spatial transforms for image registration, plus reading and writing of 3-D
NIfTI-1 images. Points are NumPy arrays of shape `(N, D)`, one row per point.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Transforms

Every transform derives from `ritk.base.Transform` and has a
`transform_points(points)` method. It takes an `(N, D)` array of physical
points and returns the mapped points as a new float array of the same shape.
A points array of the wrong shape raises `ValueError`. `Transform.inverse()`
returns `None`; none of the transforms here provides an inverse.

| Class | Module | Mapping |
|-------|--------|---------|
| `TranslationTransform` | `ritk.translation` | `x + t` |
| `ScaleTransform` | `ritk.scale` | `s * (x - c) + c` |
| `AffineTransform` | `ritk.affine` | `A (x - c) + c + t` |
| `RigidTransform` | `ritk.rigid` | `R (x - c) + c + t`. In 2-D, R comes from one angle. In 3-D, it comes from Euler angles `(x, y, z)`, composed as `Rz Ry Rx`. |
| `VersorRigid3DTransform` | `ritk.versor` | Same as rigid, 3-D only, with the rotation given as a quaternion `(x, y, z, w)` that is normalised before use |
| `BSplineTransform` | `ritk.bspline` | Cubic B-spline free-form deformation on a grid of control points |
| `ChainedTransform` | `ritk.chained` | `second(first(x))` |

Example:

```python
import numpy as np
from ritk.rigid import RigidTransform

rigid = RigidTransform(
    translation=np.array([1.0, 1.0]),
    rotation=np.array([np.pi / 2]),
    center=np.zeros(2),
)
rigid.transform_points(np.array([[1.0, 0.0]]))   # -> approximately [[1.0, 2.0]]
```

The center is optional everywhere and defaults to the origin.
`RigidTransform` and `VersorRigid3DTransform` also expose `rotation_matrix()`.

`ScaleTransform.identity`, `AffineTransform.identity` and
`RigidTransform.identity` each take a dimension and an optional center, and
build a transform that leaves every point where it is.

`AffineTransform` also implements `ritk.base.Resampleable`. Its
`resample(shape, origin, spacing, direction)` returns a copy, since an affine
map does not depend on the image grid.

To chain transforms, pass the first and the second to `ChainedTransform`:

```python
from ritk.chained import ChainedTransform
from ritk.translation import TranslationTransform

chain = ChainedTransform(
    TranslationTransform(np.array([1.0, 0.0])),
    TranslationTransform(np.array([0.0, 1.0])),
)
chain.transform_points(np.array([[0.0, 0.0]]))   # -> [[1.0, 1.0]]
```

### B-spline transforms

`BSplineTransform(grid_size, origin, spacing, direction, coefficients)` works
in 2-D and 3-D. It needs at least four control points along every axis.
`coefficients` has one row of displacements per control point, with the
x index varying fastest. Points outside the control grid (indices `0` to
`grid_size - 1`) are not displaced. `BSplineTransform.from_spatial` takes the
same arguments but stores the transpose of the given direction matrix, and
`world_to_grid(points)` maps physical points to continuous grid indices.

`ritk.bspline_grid` holds the helper functions the transform is built on:

- `bspline_basis(u)` gives the four cubic B-spline weights for each offset;
- `inverse_direction(direction)` inverts a 2x2 or 3x3 matrix, and returns the
  identity for a singular matrix or any other size;
- `world_to_grid(points, origin, spacing, direction)` maps physical points to
  continuous grid indices.

## NIfTI input/output

```python
from ritk.nifti_io import read_nifti, write_nifti

image = read_nifti("volume.nii")    # NiftiImage
write_nifti("copy.nii", image)
```

A `NiftiImage` holds:

- `data`, the voxels as a float32 array in `[Z, Y, X]` order;
- `origin`, `spacing` and `direction`, in `(x, y, z)` order.

`read_nifti` accepts single-file NIfTI-1 images (`.nii`, or `.nii.gz` when
gzip-compressed) in either byte order, with integer or floating-point voxels.
The intensity slope and intercept are applied when the slope is set. The affine
is read from the sform when the file has one, otherwise from the qform, and
failing that from the pixel dimensions. Files that are not 3-D, paired
header/image files and unknown data types raise `ValueError`.

`write_nifti` writes float32 voxels with an sform affine built from the
image's direction, spacing and origin, and gzip-compresses when the path ends
in `.gz`.

## What this package does not do

- It has no command-line tool; everything is used from Python.
- It does not read DICOM series.
- It has no general image class, interpolators or image resampling, and no
  dense displacement field transform.
- It does not run registrations or optimise transform parameters; the
  transforms only map points.