# pmvskit

Building blocks for patch-based multi-view stereo.

## What is in it

- `pmvskit.vec2`, `pmvskit.vec3`, `pmvskit.vec4`: mutable fixed-size vectors
  `Vec2`, `Vec3` and `Vec4`. They support `+`, `-`, unary `-`, scaling and
  division by numbers, `*` between two vectors as the dot product, `norm`,
  `norm2`, in-place `unitize`, and lexicographic `<`. `Vec3` has `^` as the
  cross product. Module helpers include `cross`, `proj` (homogeneous
  projection) and `ortho` (a frame around a direction); `vec4.cross3` is the
  4D generalised cross product, and `vec2` offers `perp`, `is_overlap`,
  `is_overlap_unsorted` and the segment test `is_intersect`.
- `pmvskit.mat2`, `pmvskit.mat3`, `pmvskit.mat4`: matrices `Mat2`, `Mat3`
  and `Mat4` stored as rows, indexed as `m[i, j]` or by row `m[i]`. Each
  module provides `det`, `trace`, `transpose`, `adjoint` and `invert`.
  `invert(m)` returns `(inverse, determinant)` and raises `ValueError` for a
  singular matrix.
  - `mat2` adds `eigenvalues`, `eigenvectors` and `eigen`.
  - `mat3` adds `diag`, `row_extend`, `rodrigues` and `irodrigues`
    (axis-angle conversions).
  - `mat4` adds `invert_cramer`, `translation_matrix`, `scaling_matrix`,
    `rotation_matrix_rad`, `rotation_matrix_deg`, `perspective_matrix`,
    `lookat_matrix`, `viewport_matrix`, `hat`, `trans_to_wt` and
    `wt_to_trans` (rigid transform to and from an axis-angle rotation plus
    translation). Multiplying a `Mat4` by a `Vec3` transforms it as a
    homogeneous point.
- `pmvskit.lstsq.lls(a, b)` solves `a x = b` in the least-squares sense
  (minimum-norm solution through the SVD). The result is a list of floats
  rounded to single precision.
- `pmvskit.detector`: shared pieces for the detectors. These are the
  `FeaturePoint` dataclass (`icoord`, `response`, `type`) and the
  `FeatureType` enum (`HARRIS`, `DOG`). It also has Gaussian kernels
  (`gauss_kernel`, `gauss_derivative_kernel`), masked and zero-padded
  separable convolutions, and `build_image` / `build_mask` for raw buffers.
- `pmvskit.harris.detect_harris` and `pmvskit.dog.detect_dog`: Harris corner
  and difference-of-Gaussians detectors. They work on interleaved 8-bit RGB
  buffers and take optional mask and edge buffers. They keep at most the four
  strongest responses in each cell of `2 * gspeedup` pixels.
  `harris.harris_response` and `dog.blurred_magnitude` expose the
  intermediate maps.

## Installation

```
pip install .
```

The only runtime dependency is numpy.

## Examples

```python
from pmvskit.vec3 import Vec3
from pmvskit.mat3 import rodrigues, irodrigues

axis = Vec3(0.0, 0.0, 0.5)
rot = rodrigues(axis)           # rotation of 0.5 rad about z
back = irodrigues(rot)          # approximately Vec3(0, 0, 0.5)
```

```python
from pmvskit.mat4 import invert, translation_matrix
from pmvskit.vec3 import Vec3

m = translation_matrix(Vec3(1.0, 2.0, 3.0))
inv, d = invert(m)              # inverse and determinant
print(inv * Vec3(1.0, 2.0, 3.0))  # 0.0 0.0 0.0
```

```python
from pmvskit.harris import detect_harris
from pmvskit.dog import detect_dog

# image: a sequence of width * height * 3 byte values (RGB, row major)
corners = detect_harris(image, None, None, width, height, 16, 4.0)
blobs = detect_dog(image, None, None, width, height, 16, 1.0, 3.0)
for p in sorted(corners, reverse=True):
    print(p.icoord, p.response)
```

Both detectors return their points weakest first. `FeaturePoint` objects
order by response, so sorting them in reverse puts the strongest first.

## What it does not do

This is a library of building blocks. It has no command-line tool. It does
not read or write image files or camera parameters, and you supply raw pixel
buffers yourself. It does not carry out a full reconstruction. Matching
features across views, growing and filtering patches, and writing point
clouds are not part of it.

## Running the tests

```
pip install .[test]
pytest
```