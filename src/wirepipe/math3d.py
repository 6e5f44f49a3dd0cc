from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterable, List, Sequence, Union

import numpy as np


@dataclass
class Vec3:
    x: float
    y: float
    z: float

    def __add__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> "Vec3":
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __truediv__(self, scalar: float) -> "Vec3":
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def copy(self) -> "Vec3":
        return Vec3(self.x, self.y, self.z)

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> "Vec3":
        """Unit vector in the same direction.

        A zero vector has no direction; the result is a NaN vector so a
        degenerate camera shows up as a non-finite matrix downstream.
        """
        length = self.length()
        if length == 0:
            return Vec3(math.nan, math.nan, math.nan)
        return self / length

    def dot(self, other: "Vec3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vec3") -> "Vec3":
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

    def as_list(self) -> List[float]:
        return [self.x, self.y, self.z]

    @staticmethod
    def from_sequence(values: Sequence[float]) -> "Vec3":
        if len(values) != 3:
            raise ValueError(f"Vec3 expects 3 components, got {len(values)}")
        return Vec3(float(values[0]), float(values[1]), float(values[2]))


@dataclass
class Vec4:
    """Homogeneous point or direction. ``w`` is 1 for affine points."""

    x: float
    y: float
    z: float
    w: float = 1.0

    def __add__(self, other: "Vec4") -> "Vec4":
        return Vec4(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def __sub__(self, other: "Vec4") -> "Vec4":
        return Vec4(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def copy(self) -> "Vec4":
        return Vec4(self.x, self.y, self.z, self.w)

    def dot(self, other: "Vec4") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def xyz(self) -> Vec3:
        return Vec3(self.x, self.y, self.z)

    def as_list(self) -> List[float]:
        return [self.x, self.y, self.z, self.w]


class Mat4:
    """4x4 transform stored as 16 floats in *row-major* order.

    Element (row, col) lives at index ``row*4 + col``. Vectors are columns,
    so in ``A @ B @ p`` the right-most matrix is applied to ``p`` first.
    """

    def __init__(self, values: Iterable[float] | None = None) -> None:
        if values is None:
            self.values = [0.0] * 16
        else:
            self.values = [float(v) for v in values]
            if len(self.values) != 16:
                raise ValueError(
                    f"Mat4 expects 16 floats, got {len(self.values)}. "
                    "(Flatten nested 4x4 data row by row, or use Mat4.from_rows.)"
                )

    def __repr__(self) -> str:
        return f"Mat4({self.rows()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mat4):
            return NotImplemented
        return self.values == other.values

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return self.values[row * 4 + col]

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        row, col = index
        self.values[row * 4 + col] = float(value)

    @staticmethod
    def from_rows(rows: Sequence[Sequence[float]]) -> "Mat4":
        if len(rows) != 4 or any(len(r) != 4 for r in rows):
            raise ValueError("Mat4.from_rows expects four rows of four values")
        return Mat4(v for row in rows for v in row)

    @staticmethod
    def identity() -> "Mat4":
        values = [0.0] * 16
        for i in range(4):
            values[i * 5] = 1.0
        return Mat4(values)

    @staticmethod
    def translation(tx: float, ty: float, tz: float) -> "Mat4":
        mat = Mat4.identity()
        mat.values[3] = tx
        mat.values[7] = ty
        mat.values[11] = tz
        return mat

    @staticmethod
    def scale(sx: float, sy: float, sz: float) -> "Mat4":
        mat = Mat4.identity()
        mat.values[0] = sx
        mat.values[5] = sy
        mat.values[10] = sz
        return mat

    @staticmethod
    def rotation_x(angle: float) -> "Mat4":
        c = math.cos(angle)
        s = math.sin(angle)
        return Mat4([
            1.0, 0.0, 0.0, 0.0,
            0.0, c, -s, 0.0,
            0.0, s, c, 0.0,
            0.0, 0.0, 0.0, 1.0,
        ])

    @staticmethod
    def rotation_y(angle: float) -> "Mat4":
        c = math.cos(angle)
        s = math.sin(angle)
        return Mat4([
            c, 0.0, s, 0.0,
            0.0, 1.0, 0.0, 0.0,
            -s, 0.0, c, 0.0,
            0.0, 0.0, 0.0, 1.0,
        ])

    @staticmethod
    def rotation_z(angle: float) -> "Mat4":
        c = math.cos(angle)
        s = math.sin(angle)
        return Mat4([
            c, -s, 0.0, 0.0,
            s, c, 0.0, 0.0,
            0.0, 0.0, 1.0, 0.0,
            0.0, 0.0, 0.0, 1.0,
        ])

    @staticmethod
    def rotation_axis(axis: Vec3, angle: float) -> "Mat4":
        """Right-handed rotation by ``angle`` about a unit ``axis`` through the origin."""
        x, y, z = axis.x, axis.y, axis.z
        c = math.cos(angle)
        s = math.sin(angle)
        k = 1.0 - c
        return Mat4([
            c + x * x * k, x * y * k - z * s, x * z * k + y * s, 0.0,
            y * x * k + z * s, c + y * y * k, y * z * k - x * s, 0.0,
            z * x * k - y * s, z * y * k + x * s, c + z * z * k, 0.0,
            0.0, 0.0, 0.0, 1.0,
        ])

    @staticmethod
    def shear_xy(shx: float, shy: float) -> "Mat4":
        """Shear parallel to the XY plane: x += shx*z, y += shy*z."""
        mat = Mat4.identity()
        mat.values[2] = shx
        mat.values[6] = shy
        return mat

    @staticmethod
    def multiply(items: Sequence[Union["Mat4", Vec4]]) -> Union["Mat4", Vec4]:
        """Left-fold a chain of matrices, optionally ending in a vector.

        ``Mat4.multiply([a, b, c])`` is ``a @ b @ c``; a trailing Vec4 makes
        the result a Vec4.
        """
        if not items:
            raise ValueError("Mat4.multiply needs at least one operand")
        result = items[0]
        if not isinstance(result, Mat4):
            raise ValueError("Mat4.multiply chain must start with a Mat4")
        for i, item in enumerate(items[1:], start=1):
            if isinstance(item, Vec4) and i != len(items) - 1:
                raise ValueError("a Vec4 may only appear at the end of a multiply chain")
            result = result @ item
        return result

    def __matmul__(self, other):
        if isinstance(other, Vec4):
            return self.transform(other)
        if not isinstance(other, Mat4):
            return NotImplemented

        a = self.values
        b = other.values
        result = [0.0] * 16
        for row in range(4):
            r0 = row * 4
            a0 = a[r0 + 0]
            a1 = a[r0 + 1]
            a2 = a[r0 + 2]
            a3 = a[r0 + 3]
            # C[r,c] = sum_k A[r,k] * B[k,c]
            for col in range(4):
                result[r0 + col] = a0 * b[col] + a1 * b[4 + col] + a2 * b[8 + col] + a3 * b[12 + col]
        return Mat4(result)

    def transform(self, v: Vec4) -> Vec4:
        m = self.values
        return Vec4(
            m[0] * v.x + m[1] * v.y + m[2] * v.z + m[3] * v.w,
            m[4] * v.x + m[5] * v.y + m[6] * v.z + m[7] * v.w,
            m[8] * v.x + m[9] * v.y + m[10] * v.z + m[11] * v.w,
            m[12] * v.x + m[13] * v.y + m[14] * v.z + m[15] * v.w,
        )

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in self.values)

    def rows(self) -> List[List[float]]:
        return [self.values[r * 4:r * 4 + 4] for r in range(4)]

    def to_list(self) -> List[float]:
        return list(self.values)

    def to_array(self) -> np.ndarray:
        return np.asarray(self.values, dtype=np.float64).reshape(4, 4)
