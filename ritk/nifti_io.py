"""Reading and writing single-file NIfTI-1 volumes with spatial metadata."""

from __future__ import annotations

import gzip
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

import numpy as np
from numpy.typing import ArrayLike

from ritk.base import _as_vector

PathLike = Union[str, Path]

_HEADER_SIZE = 348
_DATA_OFFSET = 352
_SINGLE_FILE_MAGIC = b"n+1\x00"
_PAIRED_MAGIC = b"ni1\x00"
_AXIS_TOLERANCE = 1e-9
_FLOAT32_CODE = 16
_MM_UNITS = 2

_DATATYPES: dict[int, str] = {
    2: "u1",
    4: "i2",
    8: "i4",
    16: "f4",
    64: "f8",
    256: "i1",
    512: "u2",
    768: "u4",
    1024: "i8",
    1280: "u8",
}


@dataclass
class NiftiImage:
    """A 3D volume with its physical placement.

    ``data`` is indexed ``[z, y, x]``. ``origin``, ``spacing`` and the columns
    of ``direction`` are given in ``(x, y, z)`` order.
    """

    data: np.ndarray
    origin: np.ndarray = field(default_factory=lambda: np.zeros(3))
    spacing: np.ndarray = field(default_factory=lambda: np.ones(3))
    direction: np.ndarray = field(default_factory=lambda: np.eye(3))

    def __post_init__(self) -> None:
        self.data = np.asarray(self.data, dtype=np.float32)
        if self.data.ndim != 3:
            raise ValueError(f"image data must be 3D, got {self.data.ndim} dimensions")
        self.origin = _as_vector(self.origin, 3, "origin")
        self.spacing = _as_vector(self.spacing, 3, "spacing")
        direction = np.array(self.direction, dtype=np.float64)
        if direction.shape != (3, 3):
            raise ValueError(f"direction must have shape (3, 3), got {direction.shape}")
        self.direction = direction

    @property
    def shape(self) -> tuple[int, int, int]:
        return self.data.shape  # type: ignore[return-value]


def _load_bytes(path: Path) -> bytes:
    if path.suffix == ".gz":
        with gzip.open(path, "rb") as stream:
            return stream.read()
    return path.read_bytes()


def _byte_order(raw: bytes) -> str:
    if len(raw) < _HEADER_SIZE:
        raise ValueError("Failed to read NIfTI file: header is truncated")
    for order in ("<", ">"):
        if struct.unpack_from(order + "i", raw, 0)[0] == _HEADER_SIZE:
            return order
    raise ValueError("Failed to read NIfTI file: invalid header size field")


def _affine_from_header(
    order: str,
    raw: bytes,
    pixdim: tuple[float, ...],
) -> np.ndarray:
    qform_code, sform_code = struct.unpack_from(order + "2h", raw, 252)
    if sform_code > 0:
        rows = np.array(struct.unpack_from(order + "12f", raw, 280), dtype=np.float64)
        return rows.reshape(3, 4)
    if qform_code > 0:
        b, c, d, qx, qy, qz = struct.unpack_from(order + "6f", raw, 256)
        a = np.sqrt(1.0 - min(b * b + c * c + d * d, 1.0))
        qfac = 1.0 if pixdim[0] == 0.0 else pixdim[0]
        rotation = np.array(
            [
                [a * a + b * b - c * c - d * d, 2 * b * c - 2 * a * d, 2 * b * d + 2 * a * c],
                [2 * b * c + 2 * a * d, a * a + c * c - b * b - d * d, 2 * c * d - 2 * a * b],
                [2 * b * d - 2 * a * c, 2 * c * d + 2 * a * b, a * a + d * d - c * c - b * b],
            ]
        )
        scales = np.array([pixdim[1], pixdim[2], pixdim[3] * qfac])
        return np.column_stack([rotation * scales[np.newaxis, :], [qx, qy, qz]])
    return np.column_stack([np.diag(pixdim[1:4]), np.zeros(3)])


def _split_affine(affine: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Split a 3x4 affine into origin, spacing and a direction matrix."""
    origin = affine[:, 3].copy()
    columns = affine[:, :3]
    spacing = np.linalg.norm(columns, axis=0)
    axes = np.eye(3)
    direction = np.column_stack(
        [
            columns[:, k] / spacing[k] if spacing[k] > _AXIS_TOLERANCE else axes[:, k]
            for k in range(3)
        ]
    )
    return origin, spacing, direction


def read_nifti(path: PathLike) -> NiftiImage:
    """Read a 3D NIfTI-1 file (``.nii`` or ``.nii.gz``) into a :class:`NiftiImage`."""
    raw = _load_bytes(Path(path))
    order = _byte_order(raw)

    magic = raw[344:348]
    if magic == _PAIRED_MAGIC:
        raise ValueError("Failed to read NIfTI file: paired header/image files are not supported")
    if magic != _SINGLE_FILE_MAGIC:
        raise ValueError("Failed to read NIfTI file: missing NIfTI-1 magic")

    dims = struct.unpack_from(order + "8h", raw, 40)
    if dims[0] != 3:
        raise ValueError(f"Expected 3D NIfTI file, found {dims[0]} dimensions")
    nx, ny, nz = dims[1:4]
    if min(nx, ny, nz) < 1:
        raise ValueError(f"Invalid NIfTI dimensions: {(nx, ny, nz)}")

    datatype = struct.unpack_from(order + "h", raw, 70)[0]
    if datatype not in _DATATYPES:
        raise ValueError(f"Unsupported NIfTI datatype code: {datatype}")
    dtype = np.dtype(_DATATYPES[datatype]).newbyteorder(order)

    pixdim = struct.unpack_from(order + "8f", raw, 76)
    vox_offset = int(struct.unpack_from(order + "f", raw, 108)[0]) or _DATA_OFFSET
    slope, intercept = struct.unpack_from(order + "2f", raw, 112)

    count = nx * ny * nz
    if len(raw) < vox_offset + count * dtype.itemsize:
        raise ValueError("Failed to read NIfTI file: voxel data is truncated")
    values = np.frombuffer(raw, dtype=dtype, count=count, offset=vox_offset).astype(np.float64)
    if slope != 0.0 and np.isfinite(slope):
        values = values * slope + intercept
    # Voxels are stored with x varying fastest, which is C order for [z, y, x].
    data = values.astype(np.float32).reshape(nz, ny, nx)

    origin, spacing, direction = _split_affine(_affine_from_header(order, raw, pixdim))
    return NiftiImage(data, origin, spacing, direction)


def _header_bytes(image: NiftiImage) -> bytes:
    nz, ny, nx = image.shape
    header = bytearray(_DATA_OFFSET)
    struct.pack_into("<i", header, 0, _HEADER_SIZE)
    header[38:39] = b"r"
    struct.pack_into("<8h", header, 40, 3, nx, ny, nz, 1, 1, 1, 1)
    struct.pack_into("<2h", header, 70, _FLOAT32_CODE, 32)
    struct.pack_into("<8f", header, 76, 1.0, *image.spacing, 1.0, 1.0, 1.0, 1.0)
    struct.pack_into("<f", header, 108, float(_DATA_OFFSET))
    struct.pack_into("<2f", header, 112, 1.0, 0.0)
    header[123] = _MM_UNITS
    struct.pack_into("<2h", header, 252, 0, 1)
    scaled = image.direction * image.spacing[np.newaxis, :]
    rows = np.column_stack([scaled, image.origin])
    struct.pack_into("<12f", header, 280, *rows.ravel())
    header[344:348] = _SINGLE_FILE_MAGIC
    return bytes(header)


def write_nifti(path: PathLike, image: NiftiImage) -> None:
    """Write ``image`` as a float32 NIfTI-1 file with an sform affine.

    A path ending in ``.gz`` is gzip-compressed.
    """
    target = Path(path)
    payload = _header_bytes(image) + np.ascontiguousarray(image.data, dtype="<f4").tobytes()
    if target.suffix == ".gz":
        with gzip.open(target, "wb") as stream:
            stream.write(payload)
    else:
        target.write_bytes(payload)